import json

from adapters.json_exporter import export_records_json, records_to_json
from core.domain.port_record import PortRecord


def test_export_records(tmp_path, settings, write_options):
    write_options("lang_foo", "OPTIONS_FILE_SET+=DOCS\n")
    record = PortRecord({"name": "foo-1.2.3", "path": "/usr/ports/lang/foo"}).amend(
        ["portname", "options"], settings=settings
    )

    path = export_records_json(records=[record], output_path=tmp_path / "out" / "ports.json")

    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"options": {"DOCS": True}, "portname": "foo"},
    ]


def test_records_to_json_is_stable():
    records = [PortRecord({"path": "/usr/ports/lang/foo", "name": "foo-1.0"})]

    text = records_to_json(records)

    assert text.endswith("\n")
    assert text.index('"name"') < text.index('"path"')

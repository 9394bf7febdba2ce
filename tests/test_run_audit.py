from pathlib import Path

from risk_engine.monitoring import AuditLog
from risk_engine.runtime import create_run_context, projection_key

SAMPLE = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


def test_run_context_from_config():
    context = create_run_context(SAMPLE, "projection")
    assert context.run_id.startswith("projection-")
    assert context.run_id.endswith(context.config_hash[:8])
    assert context.config_path == SAMPLE


def test_run_context_without_config():
    context = create_run_context(None, "adhoc", run_id="adhoc-1")
    assert context.run_id == "adhoc-1"
    assert context.config_hash == "defaults"
    assert context.config_path is None


def test_projection_key_is_stable():
    assert projection_key(87500, 60, 1.5, 555) == projection_key(87500.0, 60.0, 1.5, 555)
    assert projection_key(87500, 60, 1.5, 555) != projection_key(87500, 60, 1.5, 556)


def test_audit_log_appends_records(tmp_path):
    audit = AuditLog(tmp_path / "nested" / "audit.log", run_id="run-1", config_hash="abc")
    audit.log("projection", {"equity": 87500, "seed": 555})
    audit.log("projection", {"equity": 90000, "seed": 556})

    records = audit.read()
    assert [record["payload"]["seed"] for record in records] == [555, 556]
    assert all(record["run_id"] == "run-1" for record in records)
    assert records[0]["config_hash"] == "abc"


def test_audit_records_carry_projection_key(tmp_path):
    audit = AuditLog(tmp_path / "audit.log", run_id="run-2", config_hash="defaults")
    first_key = projection_key(87500, 60, 1.5, 555)
    rerolled_key = projection_key(87500, 60, 1.5, 556)
    audit.log("projection", {"seed": 555}, projection_key=first_key)
    audit.log("projection", {"seed": 556}, projection_key=rerolled_key)
    audit.log("projection", {"seed": 555}, projection_key=first_key)

    records = audit.for_projection(first_key)
    assert len(records) == 2
    assert all(record["run_id"] == "run-2" for record in records)
    assert [record["payload"]["seed"] for record in audit.for_projection(rerolled_key)] == [556]
    assert audit.read()[0]["recorded_at_utc"].endswith("+00:00")

from __future__ import annotations

import json

import sensory_core.audit_taxonomy as audit_taxonomy
from sensory_core import config
from sensory_core.taxonomy import all_items
from sensory_core.types import Item


def test_shipped_table_audits_clean(item_86_on):
    summary = audit_taxonomy.audit_items(all_items())
    assert summary["warnings"] == []
    assert summary["totals"]["items"] == 86
    assert summary["totals"]["scoring"] == 84
    assert summary["totals"]["excluded"] == 2
    assert summary["totals"]["registrationIncreased"] == 22
    assert summary["coverage"]["visualProcessing"]["excluded"] == [15]
    assert summary["coverage"]["attentionResponses"]["excluded"] == [86]


def test_audit_reflects_item_86_flag(monkeypatch):
    monkeypatch.setattr(config, "ITEM_86_REGISTRATION", False, raising=False)
    summary = audit_taxonomy.audit_items(all_items())
    assert summary["item_86_registration"] is False
    assert summary["totals"]["registrationIncreased"] == 21
    assert summary["coverage"]["attentionResponses"]["unassigned"] == 1


def test_audit_flags_gaps_and_repeats():
    items = [
        Item(id=1, section="auditoryProcessing"),
        Item(id=1, section="auditoryProcessing"),
        Item(id=2, section="smellProcessing"),
    ]
    summary = audit_taxonomy.audit_items(items)
    joined = "\n".join(summary["warnings"])
    assert "item 1 listed more than once" in joined
    assert "item ids missing from the table: 3, 4" in joined
    assert "unknown section smellProcessing" in joined


def test_main_writes_summary(tmp_path, capsys):
    out = tmp_path / "audit.json"
    code = audit_taxonomy.main(["--out", str(out)])
    captured = capsys.readouterr()
    assert code == 0
    assert "Item Taxonomy" in captured.out
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["totals"]["items"] == 86

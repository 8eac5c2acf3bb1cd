"""Tests for the command line entry point."""

import json
import sys

from factory_planner.catalog.facilities import FacilityID
from factory_planner.catalog.fixtures import PathTypeID
from factory_planner.catalog.items import ItemID
from factory_planner.changes.types import AddFacilityChange, AddPathChange, SetPortItemChange
from factory_planner.storage.envelopes import create_project_meta, serialize_changes, serialize_project

import main


def chain_changes():
    return [
        AddFacilityChange(facility_type=FacilityID.DEPOT_UNLOADER, position=(10, 69)),
        SetPortItemChange(facility_id="facility_1", port_index=0, item_id=ItemID.FERRIUM_ORE),
        AddFacilityChange(facility_type=FacilityID.PROTOCOL_STASH, position=(10, 60)),
        AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 62)]),
    ]


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["endfield-planner", *args])
    return main.main()


class TestCli:
    """Tests for the CLI commands."""

    def test_templates(self, monkeypatch, capsys):
        assert run(monkeypatch, "templates") == 0
        assert "valley_iv_main" in capsys.readouterr().out

    def test_recipes_for_unknown_facility(self, monkeypatch, capsys):
        assert run(monkeypatch, "recipes", "-f", "no_such_facility") == 1

    def test_recalc_change_list(self, monkeypatch, capsys, tmp_path):
        source = tmp_path / "changes.json"
        source.write_text(serialize_changes(chain_changes()), encoding="utf-8")
        output = tmp_path / "state.json"

        code = run(monkeypatch, "recalc", str(source), "-t", "valley_iv_main", "-o", str(output))

        assert code == 0
        assert "Facilities: 2" in capsys.readouterr().out
        assert json.loads(output.read_text(encoding="utf-8"))["width"] == 70

    def test_recalc_project(self, monkeypatch, capsys, tmp_path):
        source = tmp_path / "project.json"
        meta = create_project_meta("Ore line")
        source.write_text(serialize_project(meta, "valley_iv_main", chain_changes()),
                          encoding="utf-8")

        assert run(monkeypatch, "recalc", str(source)) == 0
        assert "Project: Ore line" in capsys.readouterr().out

    def test_recalc_reports_cap(self, monkeypatch, tmp_path):
        source = tmp_path / "changes.json"
        source.write_text(serialize_changes(chain_changes()), encoding="utf-8")

        assert run(monkeypatch, "recalc", str(source), "-t", "valley_iv_main",
                   "--max-iterations", "1") == 2

    def test_recalc_bad_file(self, monkeypatch, capsys, tmp_path):
        source = tmp_path / "changes.json"
        source.write_text("{}", encoding="utf-8")

        assert run(monkeypatch, "recalc", str(source)) == 1
        assert "Error" in capsys.readouterr().out

    def test_sample_reports_cap(self, monkeypatch):
        assert run(monkeypatch, "sample", "--max-iterations", "1") == 2

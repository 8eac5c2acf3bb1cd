"""Tests for JSON envelopes, project storage and state export."""

import json
import logging
from datetime import datetime, timezone

import pytest

from factory_planner.catalog.facilities import FacilityID
from factory_planner.catalog.fixtures import PathTypeID
from factory_planner.catalog.items import ItemID
from factory_planner.catalog.regions import FieldTemplateID, RegionFieldID, RegionID
from factory_planner.catalog.templates import DepotBusLayout, FieldTemplate
from factory_planner.changes.types import AddFacilityChange, AddPathChange, SetPortItemChange
from factory_planner.field.pipeline import recalculate
from factory_planner.storage.envelopes import (
    FORMAT_VERSION,
    USER_CHANGES_TYPE,
    EnvelopeError,
    Project,
    ProjectListing,
    assign_project,
    create_project_meta,
    create_region_plan,
    deserialize_changes,
    deserialize_copy_data,
    deserialize_project,
    ensure_unique_guid,
    listing_from_dict,
    listing_to_dict,
    region_plan_from_dict,
    region_plan_to_dict,
    serialize_changes,
    serialize_project,
    set_project_hidden,
    touch_project_meta,
    upsert_project_meta,
)
from factory_planner.storage.export import field_state_to_dict, to_camel
from factory_planner.storage.store import (
    PROJECT_LISTING_KEY,
    ProjectStore,
    get_project_storage_key,
    get_region_plan_storage_key,
)

NOW = datetime(2025, 3, 4, 5, 6, 7, 890000, tzinfo=timezone.utc)


def sample_changes():
    return [
        AddFacilityChange(facility_type=FacilityID.DEPOT_UNLOADER, position=(10, 69)),
        SetPortItemChange(facility_id="facility_1", port_index=0, item_id=ItemID.FERRIUM_ORE),
        AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 62)]),
    ]


def envelope(changes, **overrides):
    data = {"type": USER_CHANGES_TYPE, "version": FORMAT_VERSION, "changes": changes}
    data.update(overrides)
    return json.dumps(data)


class TestChangeListEnvelope:
    """Tests for the user change list envelope."""

    def test_round_trip(self):
        changes = sample_changes()

        assert deserialize_changes(serialize_changes(changes)) == changes

    def test_wire_format(self):
        data = json.loads(serialize_changes(sample_changes()[:1]))

        assert data == {
            "type": "endfield-factory-planner-user-changes",
            "version": 1,
            "changes": [{"type": "add-facility", "facilityType": "item_port_unloader_1",
                         "position": [10, 69], "rotation": 0}],
        }

    def test_wrong_type(self):
        with pytest.raises(EnvelopeError):
            deserialize_changes(envelope([], type="something-else"))

    def test_wrong_version(self):
        with pytest.raises(EnvelopeError):
            deserialize_changes(envelope([], version=2))

    def test_invalid_json(self):
        with pytest.raises(EnvelopeError):
            deserialize_changes("{not json")

    def test_invalid_change_names_index(self):
        text = envelope([{"type": "remove-path", "pathID": "path_1"}, {"type": "explode"}])

        with pytest.raises(EnvelopeError, match="Change 1"):
            deserialize_changes(text)

    def test_load_state_is_not_persisted(self):
        with pytest.raises(EnvelopeError):
            deserialize_changes(envelope([{"type": "loadState", "fieldState": {}}]))

    def test_copy_data_ignores_other_text(self):
        assert deserialize_copy_data("just some text") is None
        assert deserialize_copy_data(envelope([{"type": "explode"}])) is None

    def test_copy_data_accepts_change_list(self):
        assert deserialize_copy_data(serialize_changes(sample_changes())) == sample_changes()


class TestProjectEnvelope:
    """Tests for saved projects."""

    def test_meta_timestamps(self):
        meta = create_project_meta("Ore line", now=NOW)

        assert meta.created_at == "2025-03-04T05:06:07.890Z"
        assert meta.updated_at == meta.created_at
        assert len(meta.guid) == 36

    def test_touch_only_updates_modified(self):
        meta = create_project_meta("Ore line", now=NOW)
        touched = touch_project_meta(meta, now=datetime(2025, 3, 5, tzinfo=timezone.utc))

        assert touched.created_at == meta.created_at
        assert touched.updated_at == "2025-03-05T00:00:00.000Z"

    def test_round_trip_with_catalog_template(self):
        meta = create_project_meta("Ore line", now=NOW)
        text = serialize_project(meta, FieldTemplateID.VALLEY_IV_MAIN, sample_changes())

        project = deserialize_project(text)

        assert project == Project(meta, FieldTemplateID.VALLEY_IV_MAIN, sample_changes())

    def test_round_trip_with_inline_template(self):
        template = FieldTemplate(width=30, height=20, region=RegionID.WULING,
                                 depot_bus_port_limit=1, depot_bus_section_limit=2,
                                 depot_bus_layout=DepotBusLayout("bottom", 2, False))
        meta = create_project_meta("Custom", now=NOW)

        project = deserialize_project(serialize_project(meta, template, []))

        assert project.template == template
        assert recalculate(project.template).width == 30

    def test_wire_keys(self):
        meta = create_project_meta("Ore line", now=NOW)
        data = json.loads(serialize_project(meta, FieldTemplateID.WULING_MAIN, []))

        assert data["type"] == "endfield-factory-planner-project"
        assert data["template"] == "wuling_main"
        assert set(data["meta"]) == {"guid", "name", "createdAt", "updatedAt"}

    def test_unknown_template(self):
        meta = create_project_meta("Ore line", now=NOW)
        data = json.loads(serialize_project(meta, FieldTemplateID.WULING_MAIN, []))
        data["template"] = "moon_base"

        with pytest.raises(EnvelopeError):
            deserialize_project(json.dumps(data))

    def test_missing_meta(self):
        with pytest.raises(EnvelopeError):
            deserialize_project(json.dumps({"type": "endfield-factory-planner-project",
                                            "version": 1, "template": "wuling_main",
                                            "changes": []}))


class TestProjectListing:
    """Tests for the project listing."""

    def test_upsert_adds_then_replaces(self):
        meta = create_project_meta("First", now=NOW)
        listing = upsert_project_meta(ProjectListing(), meta)
        renamed = meta.model_copy(update={"name": "Renamed"})
        listing = upsert_project_meta(listing, renamed)

        assert [p.name for p in listing.projects] == ["Renamed"]

    def test_hidden_flag(self):
        meta = create_project_meta("First", now=NOW)
        listing = set_project_hidden(upsert_project_meta(ProjectListing(), meta), meta.guid, True)

        assert listing.projects[0].hidden is True
        assert listing_to_dict(listing)["projects"][0]["hidden"] is True

    def test_unique_guid(self):
        meta = create_project_meta("First", now=NOW)
        listing = upsert_project_meta(ProjectListing(), meta)

        assert ensure_unique_guid(listing, "fresh") == "fresh"
        assert ensure_unique_guid(listing, meta.guid) != meta.guid

    def test_round_trip(self):
        listing = upsert_project_meta(ProjectListing(), create_project_meta("First", now=NOW))

        assert listing_from_dict(listing_to_dict(listing)) == listing


class TestRegionPlan:
    """Tests for region plans."""

    def test_one_slot_per_field(self):
        plan = create_region_plan(RegionID.WULING)

        assert [a.field_id for a in plan.assignments] == [
            RegionFieldID.WULING_CORE_AIC_AREA.value, RegionFieldID.WULING_SKY_KING_FLATS.value]
        assert all(a.project_guid is None for a in plan.assignments)

    def test_assign(self):
        plan = assign_project(create_region_plan(RegionID.WULING),
                              RegionFieldID.WULING_SKY_KING_FLATS.value, "abc")

        assert plan.assignments[1].project_guid == "abc"

    def test_assign_foreign_field(self):
        with pytest.raises(EnvelopeError):
            assign_project(create_region_plan(RegionID.WULING),
                           RegionFieldID.VALLEY_IV_REFUGEE_CAMP.value, "abc")

    def test_null_guid_is_written(self):
        data = region_plan_to_dict(create_region_plan(RegionID.VALLEY_IV))

        assert data["assignments"][0] == {"fieldId": "valley_iv_core_aic_area", "projectGuid": None}
        assert region_plan_from_dict(data) == create_region_plan(RegionID.VALLEY_IV)

    def test_missing_guid_key(self):
        data = region_plan_to_dict(create_region_plan(RegionID.VALLEY_IV))
        del data["assignments"][0]["projectGuid"]

        with pytest.raises(EnvelopeError):
            region_plan_from_dict(data)


class TestProjectStore:
    """Tests for directory-backed storage."""

    def test_storage_keys(self):
        assert get_project_storage_key("abc") == "endfield-factory-planner-project-abc"
        assert get_region_plan_storage_key(RegionID.WULING) == \
            "endfield-factory-planner-region-plan-wuling"

    def test_save_and_load_project(self, tmp_path):
        store = ProjectStore(tmp_path)
        meta = create_project_meta("Ore line", now=NOW)
        project = Project(meta, FieldTemplateID.VALLEY_IV_MAIN, sample_changes())

        store.save_project(project)

        assert store.load_project(meta.guid) == project
        assert [p.guid for p in store.load_listing().projects] == [meta.guid]

    def test_missing_project(self, tmp_path):
        assert ProjectStore(tmp_path).load_project("nope") is None

    def test_corrupt_project(self, tmp_path, caplog):
        (tmp_path / f"{get_project_storage_key('bad')}.json").write_text("{", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="factory_planner.storage.store"):
            assert ProjectStore(tmp_path).load_project("bad") is None
        assert "bad" in caplog.text

    def test_corrupt_listing_starts_empty(self, tmp_path):
        (tmp_path / f"{PROJECT_LISTING_KEY}.json").write_text("[]", encoding="utf-8")

        assert ProjectStore(tmp_path).load_listing() == ProjectListing()

    def test_region_plan_round_trip(self, tmp_path):
        store = ProjectStore(tmp_path)
        plan = assign_project(create_region_plan(RegionID.VALLEY_IV),
                              RegionFieldID.VALLEY_IV_INFRA_STATION.value, "abc")

        store.save_region_plan(plan)

        assert store.load_region_plan(RegionID.VALLEY_IV) == plan
        assert store.load_region_plan(RegionID.WULING) == create_region_plan(RegionID.WULING)

    def test_region_plan_for_other_region(self, tmp_path):
        store = ProjectStore(tmp_path)
        plan = create_region_plan(RegionID.VALLEY_IV)
        path = tmp_path / f"{get_region_plan_storage_key(RegionID.WULING)}.json"
        path.write_text(json.dumps(region_plan_to_dict(plan)), encoding="utf-8")

        assert store.load_region_plan(RegionID.WULING) == create_region_plan(RegionID.WULING)


class TestExport:
    """Tests for dumping computed states."""

    def test_to_camel(self):
        assert to_camel("path_fixtures") == "pathFixtures"
        assert to_camel("connected_path_id") == "connectedPathID"
        assert to_camel("width") == "width"

    def test_state_dump(self):
        state = recalculate(FieldTemplateID.VALLEY_IV_MAIN, sample_changes())
        data = field_state_to_dict(state)

        assert data["template"] == "valley_iv_main"
        assert data["debugInfo"]["flowSolverConverged"] is True
        assert data["paths"][0]["points"] == [[11, 69], [11, 62]]
        assert data["facilities"][0]["ports"][0]["connectedPathID"] == "path_1"
        assert json.loads(json.dumps(data)) == data

    def test_inline_template_dump(self):
        template = FieldTemplate(width=30, height=20, region=RegionID.WULING,
                                 depot_bus_port_limit=1, depot_bus_section_limit=2)
        data = field_state_to_dict(recalculate(template))

        assert data["template"]["depotBusSectionLimit"] == 2

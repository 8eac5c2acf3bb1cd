"""Tests for selection bounds, rotation and bulk edits."""

from factory_planner.catalog.facilities import FacilityID
from factory_planner.catalog.fixtures import PathFixtureID, PathTypeID
from factory_planner.catalog.items import ItemID
from factory_planner.catalog.regions import FieldTemplateID
from factory_planner.changes.refs import PendingRef
from factory_planner.changes.types import (
    AddFacilityChange,
    AddPathChange,
    AddPathFixtureChange,
    MoveFacilityChange,
    MovePathFixtureChange,
    MultiChange,
    RemoveFacilityChange,
    RemovePathChange,
    RotateFacilityChange,
    SetPortItemChange,
    UpdatePathPointsChange,
)
from factory_planner.core.models import ItemFlow
from factory_planner.field.pipeline import recalculate, recalculate_state
from factory_planner.selection.operations import (
    boxes_overlap,
    create_copy_changes,
    create_delete_changes,
    create_fixture_move_changes,
    create_nudge_changes,
    get_box_bounds,
    get_selection_from_box,
)
from factory_planner.selection.rotation import (
    Bounds,
    calculate_rotation_center,
    calculate_selection_bounds,
    rotate_point_clockwise,
    rotate_point_counter_clockwise,
    rotate_selection,
)

VALLEY = FieldTemplateID.VALLEY_IV_MAIN


def fitting_and_belt():
    return recalculate(VALLEY, [
        AddFacilityChange(facility_type=FacilityID.FITTING_UNIT, position=(0, 0)),
        AddPathChange(path_type=PathTypeID.BELT, points=[(5, 1), (8, 1)]),
    ])


def belt_chain():
    return recalculate(VALLEY, [
        AddFacilityChange(facility_type=FacilityID.DEPOT_UNLOADER, position=(10, 69)),
        SetPortItemChange(facility_id="facility_1", port_index=0, item_id=ItemID.FERRIUM_ORE),
        AddFacilityChange(facility_type=FacilityID.PROTOCOL_STASH, position=(10, 60)),
        AddPathChange(path_type=PathTypeID.BELT, points=[(11, 69), (11, 62)]),
    ])


class TestPointRotation:
    """Tests for rotating single points."""

    def test_clockwise(self):
        assert rotate_point_clockwise((5, 1), (4, 1)) == (4, 0)
        assert rotate_point_clockwise((4, 0), (4, 1)) == (3, 1)

    def test_counter_clockwise_undoes_clockwise(self):
        center = (7, 3)
        for point in [(0, 0), (7, 3), (10, -2), (3, 9)]:
            assert rotate_point_counter_clockwise(rotate_point_clockwise(point, center), center) == point

    def test_four_turns_are_identity(self):
        point = (12, 5)
        for _ in range(4):
            point = rotate_point_clockwise(point, (3, 4))
        assert point == (12, 5)


class TestSelectionBounds:
    """Tests for the joint bounding box of a selection."""

    def test_bounds_and_center(self):
        state = fitting_and_belt()
        bounds = calculate_selection_bounds(state, ["facility_1", "path_1"])

        assert bounds == Bounds(0, 0, 9, 3)
        assert calculate_rotation_center(bounds) == (4, 1)

    def test_unknown_ids_ignored(self):
        assert calculate_selection_bounds(fitting_and_belt(), ["facility_9"]) is None


class TestRotateSelection:
    """Tests for rotating a selection a quarter turn."""

    def test_changes_for_facility_and_path(self):
        changes = rotate_selection(fitting_and_belt(), ["facility_1", "path_1"])

        assert changes == [
            MoveFacilityChange(facility_id="facility_1", new_position=(3, 3)),
            RotateFacilityChange(facility_id="facility_1", new_rotation=90),
            UpdatePathPointsChange(path_id="path_1", points=[(4, 0), (4, -3)]),
        ]

    def test_empty_selection(self):
        assert rotate_selection(fitting_and_belt(), []) == []

    def test_four_turns_restore_layout(self):
        state = recalculate(VALLEY, [
            AddFacilityChange(facility_type=FacilityID.DEPOT_UNLOADER, position=(20, 20)),
        ])
        original = state.facilities[0]

        for _ in range(4):
            state = recalculate_state(state, rotate_selection(state, ["facility_1"]))

        facility = state.facilities[0]
        assert (facility.x, facility.y, facility.rotation) == (original.x, original.y, 0)
        assert (facility.width, facility.height) == (original.width, original.height)

    def test_counter_clockwise_undoes_clockwise(self):
        state = fitting_and_belt()
        turned = recalculate_state(state, rotate_selection(state, ["facility_1", "path_1"]))
        back = recalculate_state(
            turned, rotate_selection(turned, ["facility_1", "path_1"], clockwise=False))

        assert [(f.x, f.y, f.rotation) for f in back.facilities] == [(0, 0, 0)]
        assert back.paths[0].points == [(5, 1), (8, 1)]

    def test_fixture_turns_in_place(self):
        state = recalculate(VALLEY, [
            AddPathFixtureChange(fixture_type=PathFixtureID.SPLITTER, position=(6, 6)),
        ])
        changes = rotate_selection(state, ["fixture_1"])

        assert len(changes) == 1
        assert changes[0].new_rotation == 90


class TestBoxSelection:
    """Tests for selecting by drag box."""

    def test_box_bounds_normalized(self):
        assert get_box_bounds((5, 1), (2, 4)) == Bounds(2, 1, 5, 4)

    def test_touching_boxes_do_not_overlap(self):
        assert not boxes_overlap(Bounds(0, 0, 3, 3), Bounds(3, 0, 5, 3))
        assert boxes_overlap(Bounds(0, 0, 3, 3), Bounds(2, 2, 5, 5))

    def test_selects_facility_and_path(self):
        state = fitting_and_belt()

        assert get_selection_from_box((0, 0), (9, 3), state) == {"facility_1", "path_1"}

    def test_selects_only_touched_entities(self):
        state = fitting_and_belt()

        assert get_selection_from_box((3, 0), (5, 3), state) == set()
        assert get_selection_from_box((6, 0), (7, 2), state) == {"path_1"}


class TestBulkEdits:
    """Tests for delete, nudge and copy."""

    def test_delete(self):
        state = belt_chain()
        changes = create_delete_changes(["facility_2", "path_1", "fixture_9"], state)

        assert changes == [RemoveFacilityChange(facility_id="facility_2"),
                           RemovePathChange(path_id="path_1")]

    def test_nudge(self):
        state = recalculate(VALLEY, [
            AddFacilityChange(facility_type=FacilityID.FITTING_UNIT, position=(0, 0)),
            AddPathChange(path_type=PathTypeID.BELT, points=[(5, 1), (8, 1)]),
            AddPathFixtureChange(fixture_type=PathFixtureID.SPLITTER, position=(12, 12)),
        ])
        changes = create_nudge_changes(["facility_1", "path_1", "fixture_1"], state, 1, 2)

        assert changes == [
            MoveFacilityChange(facility_id="facility_1", new_position=(1, 2)),
            UpdatePathPointsChange(path_id="path_1", points=[(6, 3), (9, 3)]),
            MovePathFixtureChange(fixture_id="fixture_1", new_position=(13, 14)),
        ]

    def test_copy_uses_pending_refs(self):
        state = belt_chain()
        changes = create_copy_changes(["facility_1", "facility_2", "path_1"], state, offset=(20, 0))

        assert [c.type for c in changes] == [
            "add-facility", "add-facility", "add-path", "set-port-item"]
        assert changes[3].facility_id == PendingRef("facility", 0)
        assert changes[2].points == [(31, 69), (31, 62)]

    def test_pasted_copy_works(self):
        state = belt_chain()
        changes = create_copy_changes(["facility_1", "facility_2", "path_1"], state, offset=(20, 0))
        pasted = recalculate_state(state, [MultiChange(changes=changes)])

        copy_unloader = pasted.find_facility("facility_3")
        copy_stash = pasted.find_facility("facility_4")
        assert (copy_unloader.x, copy_unloader.y) == (30, 69)
        assert copy_unloader.ports[0].set_item == ItemID.FERRIUM_ORE
        assert copy_stash.input_flows == [ItemFlow(ItemID.FERRIUM_ORE, 0.5, 0.5)]

    def test_copy_of_nothing(self):
        assert create_copy_changes(["facility_9"], belt_chain()) == []


class TestFixtureMove:
    """Tests for dragging a fixture."""

    def _bridged(self, *extra):
        return recalculate(VALLEY, [
            AddPathChange(path_type=PathTypeID.BELT, points=[(0, 5), (10, 5)]),
            AddPathFixtureChange(fixture_type=PathFixtureID.BELT_BRIDGE, position=(5, 5)),
            *extra,
        ])

    def test_slide_along_own_paths(self):
        state = self._bridged()

        assert create_fixture_move_changes("fixture_1", (6, 5), state) == [
            MovePathFixtureChange(fixture_id="fixture_1", new_position=(6, 5)),
            UpdatePathPointsChange(path_id="path_1", points=[(0, 5), (6, 5)]),
            UpdatePathPointsChange(path_id="path_2", points=[(6, 5), (10, 5)]),
        ]

    def test_move_onto_other_path(self):
        state = self._bridged(AddPathChange(path_type=PathTypeID.BELT, points=[(20, 0), (20, 10)]))

        changes = create_fixture_move_changes("fixture_1", (20, 5), state)

        assert changes == [
            RemovePathChange(path_id="path_1"),
            RemovePathChange(path_id="path_2"),
            AddPathChange(path_type=PathTypeID.BELT, points=[(0, 5), (10, 5)]),
            RemovePathChange(path_id="path_3"),
            AddPathChange(path_type=PathTypeID.BELT, points=[(20, 0), (20, 5)]),
            AddPathChange(path_type=PathTypeID.BELT, points=[(20, 5), (20, 10)]),
            MovePathFixtureChange(fixture_id="fixture_1", new_position=(20, 5)),
        ]

        moved = recalculate_state(state, changes)
        assert sorted(p.points for p in moved.paths) == [
            [(0, 5), (10, 5)], [(20, 0), (20, 5)], [(20, 5), (20, 10)]]
        assert (moved.path_fixtures[0].x, moved.path_fixtures[0].y) == (20, 5)

    def test_unknown_fixture(self):
        assert create_fixture_move_changes("fixture_9", (1, 1), self._bridged()) == []

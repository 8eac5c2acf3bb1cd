"""Versioned JSON envelopes for change lists, projects and region plans.

Every document carries a ``type`` string and a bare integer ``version``.
The whole document is validated before any change in it is trusted; a
document that fails raises ``EnvelopeError`` and is never half-loaded.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..catalog.facilities import FacilityID
from ..catalog.regions import REGION_FIELDS, FieldTemplateID, RegionID
from ..catalog.templates import DepotBusLayout, FieldTemplate, TemplateRef
from ..changes.errors import ChangeError
from ..changes.types import PERSISTED_CHANGE_TYPES, dump_change, parse_change

logger = logging.getLogger(__name__)

USER_CHANGES_TYPE = "endfield-factory-planner-user-changes"
PROJECT_TYPE = "endfield-factory-planner-project"
PROJECT_LISTING_TYPE = "endfield-factory-planner-project-listing"
REGION_PLAN_TYPE = "endfield-factory-planner-region-plan"
FORMAT_VERSION = 1


class EnvelopeError(ValueError):
    """A stored or pasted document that cannot be loaded."""


class EnvelopeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UserChangesEnvelope(EnvelopeModel):
    type: Literal["endfield-factory-planner-user-changes"]
    version: Literal[1]
    changes: List[Dict[str, Any]]


class ProjectMeta(EnvelopeModel):
    guid: str
    name: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    hidden: Optional[bool] = None


class DepotBusLayoutModel(EnvelopeModel):
    arrangement: Literal["bottom", "bottom-right"]
    bottom_sections: int = Field(alias="bottomSections", ge=0)
    right_sections: int = Field(default=0, alias="rightSections", ge=0)
    has_port: bool = Field(alias="hasPort")


class FieldTemplateModel(EnvelopeModel):
    """An inline field template, for projects not bound to a catalog template."""
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    region: RegionID
    depot_bus_port_limit: int = Field(alias="depotBusPortLimit", ge=0)
    depot_bus_section_limit: int = Field(alias="depotBusSectionLimit", ge=0)
    depot_bus_layout: Optional[DepotBusLayoutModel] = Field(default=None, alias="depotBusLayout")
    initial_facility_type: Optional[FacilityID] = Field(default=None, alias="initialFacilityType")

    def to_template(self) -> FieldTemplate:
        layout = None
        if self.depot_bus_layout is not None:
            layout = DepotBusLayout(
                arrangement=self.depot_bus_layout.arrangement,
                bottom_sections=self.depot_bus_layout.bottom_sections,
                has_port=self.depot_bus_layout.has_port,
                right_sections=self.depot_bus_layout.right_sections,
            )
        return FieldTemplate(
            width=self.width,
            height=self.height,
            region=self.region,
            depot_bus_port_limit=self.depot_bus_port_limit,
            depot_bus_section_limit=self.depot_bus_section_limit,
            depot_bus_layout=layout,
            initial_facility_type=self.initial_facility_type,
        )

    @classmethod
    def from_template(cls, template: FieldTemplate) -> "FieldTemplateModel":
        layout = template.depot_bus_layout
        return cls(
            width=template.width,
            height=template.height,
            region=template.region,
            depot_bus_port_limit=template.depot_bus_port_limit,
            depot_bus_section_limit=template.depot_bus_section_limit,
            depot_bus_layout=None if layout is None else DepotBusLayoutModel(
                arrangement=layout.arrangement,
                bottom_sections=layout.bottom_sections,
                right_sections=layout.right_sections,
                has_port=layout.has_port,
            ),
            initial_facility_type=template.initial_facility_type,
        )


class ProjectEnvelope(EnvelopeModel):
    type: Literal["endfield-factory-planner-project"]
    version: Literal[1]
    meta: ProjectMeta
    template: Union[FieldTemplateID, FieldTemplateModel]
    changes: List[Dict[str, Any]]


class ProjectListing(EnvelopeModel):
    type: Literal["endfield-factory-planner-project-listing"] = PROJECT_LISTING_TYPE
    version: Literal[1] = FORMAT_VERSION
    projects: List[ProjectMeta] = Field(default_factory=list)


class RegionPlanAssignment(EnvelopeModel):
    field_id: str = Field(alias="fieldId")
    project_guid: Optional[str] = Field(alias="projectGuid")


class RegionPlan(EnvelopeModel):
    type: Literal["endfield-factory-planner-region-plan"] = REGION_PLAN_TYPE
    version: Literal[1] = FORMAT_VERSION
    region: RegionID
    assignments: List[RegionPlanAssignment]


class Project(NamedTuple):
    """A loaded project, with its changes parsed and ready to replay."""
    meta: ProjectMeta
    template: TemplateRef
    changes: list


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise EnvelopeError(f"Invalid JSON: {exc}") from exc


def _validate(model, data: Any):
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise EnvelopeError(str(exc)) from exc


def _dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _parse_persisted_changes(payloads: Iterable[dict]) -> list:
    changes = []
    for index, payload in enumerate(payloads):
        try:
            changes.append(parse_change(payload, allowed=PERSISTED_CHANGE_TYPES))
        except ChangeError as exc:
            raise EnvelopeError(f"Change {index}: {exc}") from exc
    return changes


def changes_to_dict(changes: Iterable) -> dict:
    return {
        "type": USER_CHANGES_TYPE,
        "version": FORMAT_VERSION,
        "changes": [dump_change(change) for change in changes],
    }


def serialize_changes(changes: Iterable) -> str:
    return json.dumps(changes_to_dict(changes))


def deserialize_changes(text: str) -> list:
    """Parse a change list envelope.

    Raises:
        EnvelopeError: if the text is not JSON, the envelope type or version
            does not match, or any change in it is invalid
    """
    envelope = _validate(UserChangesEnvelope, _load_json(text))
    return _parse_persisted_changes(envelope.changes)


def deserialize_copy_data(text: str) -> Optional[list]:
    """Like ``deserialize_changes``, but returns None for text that is not a change list.

    Meant for clipboard contents, which are often something else entirely.
    """
    try:
        return deserialize_changes(text)
    except EnvelopeError as exc:
        logger.debug("Ignoring clipboard data: %s", exc)
        return None


def _iso_now(now: Optional[datetime] = None) -> str:
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_project_meta(name: str, now: Optional[datetime] = None) -> ProjectMeta:
    timestamp = _iso_now(now)
    return ProjectMeta(guid=str(uuid.uuid4()), name=name, created_at=timestamp, updated_at=timestamp)


def touch_project_meta(meta: ProjectMeta, now: Optional[datetime] = None) -> ProjectMeta:
    return meta.model_copy(update={"updated_at": _iso_now(now)})


def project_to_dict(meta: ProjectMeta, template: TemplateRef, changes: Iterable) -> dict:
    if isinstance(template, FieldTemplate):
        template_data = _dump(FieldTemplateModel.from_template(template))
    else:
        template_data = FieldTemplateID(template).value
    return {
        "type": PROJECT_TYPE,
        "version": FORMAT_VERSION,
        "meta": _dump(meta),
        "template": template_data,
        "changes": [dump_change(change) for change in changes],
    }


def serialize_project(meta: ProjectMeta, template: TemplateRef, changes: Iterable) -> str:
    return json.dumps(project_to_dict(meta, template, changes))


def project_from_dict(data: Any) -> Project:
    """Validate a project document.

    Raises:
        EnvelopeError: if the document or any change in it is invalid
    """
    envelope = _validate(ProjectEnvelope, data)
    template = envelope.template
    if isinstance(template, FieldTemplateModel):
        template = template.to_template()
    return Project(envelope.meta, template, _parse_persisted_changes(envelope.changes))


def deserialize_project(text: str) -> Project:
    return project_from_dict(_load_json(text))


def ensure_unique_guid(listing: ProjectListing, guid: str) -> str:
    """Keep ``guid`` unless the listing already has it, else draw a fresh one."""
    existing = {project.guid for project in listing.projects}
    while guid in existing:
        guid = str(uuid.uuid4())
    return guid


def upsert_project_meta(listing: ProjectListing, meta: ProjectMeta) -> ProjectListing:
    projects = list(listing.projects)
    for index, project in enumerate(projects):
        if project.guid == meta.guid:
            projects[index] = meta
            break
    else:
        projects.append(meta)
    return listing.model_copy(update={"projects": projects})


def set_project_hidden(listing: ProjectListing, guid: str, hidden: bool) -> ProjectListing:
    projects = [
        project.model_copy(update={"hidden": hidden}) if project.guid == guid else project
        for project in listing.projects
    ]
    return listing.model_copy(update={"projects": projects})


def listing_to_dict(listing: ProjectListing) -> dict:
    return _dump(listing)


def listing_from_dict(data: Any) -> ProjectListing:
    return _validate(ProjectListing, data)


def create_region_plan(region: RegionID) -> RegionPlan:
    """An empty plan with one unassigned slot per field of the region."""
    return RegionPlan(region=region, assignments=[
        RegionPlanAssignment(field_id=field.id.value, project_guid=None)
        for field in REGION_FIELDS[RegionID(region)]
    ])


def assign_project(plan: RegionPlan, field_id: str, project_guid: Optional[str]) -> RegionPlan:
    """Point a field of the plan at a project, or clear it with None.

    Raises:
        EnvelopeError: if the field does not belong to the plan's region
    """
    if field_id not in {a.field_id for a in plan.assignments}:
        raise EnvelopeError(f"Field {field_id!r} is not part of region {plan.region.value}")
    assignments = [
        a.model_copy(update={"project_guid": project_guid}) if a.field_id == field_id else a
        for a in plan.assignments
    ]
    return plan.model_copy(update={"assignments": assignments})


def region_plan_to_dict(plan: RegionPlan) -> dict:
    # projectGuid is written even when null
    return plan.model_dump(mode="json", by_alias=True)


def region_plan_from_dict(data: Any) -> RegionPlan:
    return _validate(RegionPlan, data)

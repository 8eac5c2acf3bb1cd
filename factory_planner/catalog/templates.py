"""Field templates: grid size, region and depot bus layout per factory field."""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .facilities import FacilityID
from .regions import FieldTemplateID, RegionID


@dataclass(frozen=True)
class DepotBusLayout:
    """Where the fixed depot bus runs along the field edge."""
    arrangement: str  # 'bottom' or 'bottom-right'
    bottom_sections: int
    has_port: bool
    right_sections: int = 0


@dataclass(frozen=True)
class FieldTemplate:
    width: int
    height: int
    region: RegionID
    depot_bus_port_limit: int
    depot_bus_section_limit: int
    depot_bus_layout: Optional[DepotBusLayout] = None
    initial_facility_type: Optional[FacilityID] = None


FIELD_TEMPLATES: Dict[FieldTemplateID, FieldTemplate] = {
    FieldTemplateID.VALLEY_IV_MAIN: FieldTemplate(
        width=70,
        height=70,
        region=RegionID.VALLEY_IV,
        depot_bus_port_limit=0,
        depot_bus_section_limit=0,
        depot_bus_layout=DepotBusLayout("bottom-right", bottom_sections=9,
                                        has_port=True, right_sections=9),
        initial_facility_type=FacilityID.PROTOCOL_AUTOMATION_CORE_PAC,
    ),
    FieldTemplateID.VALLEY_IV_OUTPOST: FieldTemplate(
        width=40,
        height=40,
        region=RegionID.VALLEY_IV,
        depot_bus_port_limit=0,
        depot_bus_section_limit=0,
        depot_bus_layout=DepotBusLayout("bottom", bottom_sections=5, has_port=False),
        initial_facility_type=FacilityID.SUB_PAC,
    ),
    FieldTemplateID.WULING_MAIN: FieldTemplate(
        width=60,
        height=60,
        region=RegionID.WULING,
        depot_bus_port_limit=1,
        depot_bus_section_limit=5,
        initial_facility_type=FacilityID.PROTOCOL_AUTOMATION_CORE_PAC,
    ),
    FieldTemplateID.WULING_OUTPOST: FieldTemplate(
        width=40,
        height=40,
        region=RegionID.WULING,
        depot_bus_port_limit=1,
        depot_bus_section_limit=6,
        initial_facility_type=FacilityID.SUB_PAC,
    ),
}

TemplateRef = Union[str, FieldTemplate]


def resolve_field_template(template: TemplateRef) -> FieldTemplate:
    """Accept either a template id or a template object.

    Raises:
        ValueError: If the id is not a known template
    """
    if isinstance(template, FieldTemplate):
        return template
    return FIELD_TEMPLATES[FieldTemplateID(template)]

"""Regions, their factory fields and the raw resources they supply."""

from enum import Enum
from typing import Dict, List, NamedTuple

from .items import ItemID


class RegionID(str, Enum):
    VALLEY_IV = "valley_iv"
    WULING = "wuling"


class FieldTemplateID(str, Enum):
    VALLEY_IV_MAIN = "valley_iv_main"
    VALLEY_IV_OUTPOST = "valley_iv_outpost"
    WULING_MAIN = "wuling_main"
    WULING_OUTPOST = "wuling_outpost"


class FactoryRole(str, Enum):
    CORE_AIC_AREA = "core_aic_area"
    OUTPOST = "outpost"


class RegionFieldID(str, Enum):
    VALLEY_IV_CORE_AIC_AREA = "valley_iv_core_aic_area"
    VALLEY_IV_REFUGEE_CAMP = "valley_iv_refugee_camp"
    VALLEY_IV_INFRA_STATION = "valley_iv_infra_station"
    VALLEY_IV_RECONSTRUCTION_HQ = "valley_iv_reconstruction_hq"
    WULING_CORE_AIC_AREA = "wuling_core_aic_area"
    WULING_SKY_KING_FLATS = "wuling_sky_king_flats"


class RegionResourceSupply(NamedTuple):
    item: ItemID
    rate_per_minute: float


class RegionFieldDefinition(NamedTuple):
    """A named factory field inside a region."""
    id: RegionFieldID
    region: RegionID
    template: FieldTemplateID
    role: FactoryRole


REGIONS: List[RegionID] = [RegionID.VALLEY_IV, RegionID.WULING]

REGION_RESOURCE_SUPPLIES: Dict[RegionID, List[RegionResourceSupply]] = {
    RegionID.VALLEY_IV: [
        RegionResourceSupply(ItemID.ORIGINIUM_ORE, 560),
        RegionResourceSupply(ItemID.AMETHYST_ORE, 240),
        RegionResourceSupply(ItemID.FERRIUM_ORE, 1080),
    ],
    RegionID.WULING: [
        RegionResourceSupply(ItemID.ORIGINIUM_ORE, 360),
        RegionResourceSupply(ItemID.FERRIUM_ORE, 90),
    ],
}

REGION_FIELDS: Dict[RegionID, List[RegionFieldDefinition]] = {
    RegionID.VALLEY_IV: [
        RegionFieldDefinition(RegionFieldID.VALLEY_IV_CORE_AIC_AREA, RegionID.VALLEY_IV,
                              FieldTemplateID.VALLEY_IV_MAIN, FactoryRole.CORE_AIC_AREA),
        RegionFieldDefinition(RegionFieldID.VALLEY_IV_REFUGEE_CAMP, RegionID.VALLEY_IV,
                              FieldTemplateID.VALLEY_IV_OUTPOST, FactoryRole.OUTPOST),
        RegionFieldDefinition(RegionFieldID.VALLEY_IV_INFRA_STATION, RegionID.VALLEY_IV,
                              FieldTemplateID.VALLEY_IV_OUTPOST, FactoryRole.OUTPOST),
        RegionFieldDefinition(RegionFieldID.VALLEY_IV_RECONSTRUCTION_HQ, RegionID.VALLEY_IV,
                              FieldTemplateID.VALLEY_IV_OUTPOST, FactoryRole.OUTPOST),
    ],
    RegionID.WULING: [
        RegionFieldDefinition(RegionFieldID.WULING_CORE_AIC_AREA, RegionID.WULING,
                              FieldTemplateID.WULING_MAIN, FactoryRole.CORE_AIC_AREA),
        RegionFieldDefinition(RegionFieldID.WULING_SKY_KING_FLATS, RegionID.WULING,
                              FieldTemplateID.WULING_OUTPOST, FactoryRole.OUTPOST),
    ],
}

REGION_FIELD_LOOKUP: Dict[RegionFieldID, RegionFieldDefinition] = {
    field.id: field for fields in REGION_FIELDS.values() for field in fields
}

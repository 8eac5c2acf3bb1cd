"""Facility catalog with footprint, power and port layout data."""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from .regions import RegionID


class FacilityID(str, Enum):
    """Facility types placeable on a field."""
    FITTING_UNIT = "item_port_cmpt_mc_1"
    SEPARATING_UNIT = "item_port_dismantler_1"
    FLUID_SUPPLY_UNIT = "item_port_dumper_1"
    FILLING_UNIT = "item_port_filling_pd_mc_1"
    REFINING_UNIT = "item_port_furnance_1"
    SHREDDING_UNIT = "item_port_grinder_1"
    FLUID_TANK = "item_port_liquid_storager_1"
    DEPOT_LOADER = "item_port_loader_1"
    DEPOT_BUS_SECTION = "item_port_log_hongs_bus"
    DEPOT_BUS_PORT = "item_port_log_hongs_bus_source"
    REACTOR_CRUCIBLE = "item_port_mix_pool_1"
    PLANTING_UNIT = "item_port_planter_1"
    ELECTRIC_NEXUS = "item_port_power_port_1"
    THERMAL_BANK = "item_port_power_sta_1"
    SEED_PICKING_UNIT = "item_port_seedcol_1"
    MOULDING_UNIT = "item_port_shaper_1"
    AKETINE_PLOT = "item_port_soil_bbflower_1"
    JINCAO_PLOT = "item_port_soil_grass_1"
    YAZHEN_PLOT = "item_port_soil_grass_2"
    BUCKFLOWER_PLOT = "item_port_soil_moss_1"
    CITROME_PLOT = "item_port_soil_moss_2"
    SANDLEAF_PLOT = "item_port_soil_moss_3"
    REED_RYE_PLOT = "item_port_soil_sp_1"
    TARTPEPPER_PLOT = "item_port_soil_sp_2"
    REDJADE_GINSENG_PLOT = "item_port_soil_sp_3"
    AMBER_RICE_PLOT = "item_port_soil_sp_4"
    PROTOCOL_AUTOMATION_CORE_PAC = "item_port_sp_hub_1"
    SUB_PAC = "item_port_sp_sub_hub_1"
    SPRINKLER = "item_port_squirter_1"
    PROTOCOL_STASH = "item_port_storager_1"
    GRINDING_UNIT = "item_port_thickener_1"
    PACKAGING_UNIT = "item_port_tools_asm_mc_1"
    DEPOT_UNLOADER = "item_port_unloader_1"
    GEARING_UNIT = "item_port_winder_1"
    FORGE_OF_THE_SKY = "item_port_xiranite_oven_1"
    GRENADE_TOWER = "item_port_battle_cannon_1"
    HE_GRENADE_TOWER = "item_port_battle_cannon_2"
    MARSH_GAS_MK_I = "item_port_battle_fog_1"
    LN_TOWER = "item_port_battle_frost_1"
    BEAM_TOWER = "item_port_battle_laser_1"
    SURGE_TOWER = "item_port_battle_lightning_1"
    MEDICAL_TOWER = "item_port_battle_medic_1"
    OMNIDIRECTIONAL_SONIC_TOWER = "item_port_battle_shockwave_1"
    SENTRY_TOWER = "item_port_battle_sniper_1"
    GUN_TOWER = "item_port_battle_turret_1"
    HEAVY_GUN_TOWER = "item_port_battle_turret_2"
    EASY_STASH = "item_port_carrier_1"
    MEMO_BEACON = "item_port_marker_1"
    PORTABLE_ORIGINIUM_RIG = "item_port_miner_1"
    ELECTRIC_MINING_RIG = "item_port_miner_2"
    ELECTRIC_MINING_RIG_MK_II = "item_port_miner_3"
    ELECTRIC_PYLON = "item_port_power_diffuser_1"
    XIRANITE_PYLON = "item_port_power_diffuser_2"
    RELAY_TOWER = "item_port_power_pole_2"
    XIRANITE_RELAY = "item_port_power_pole_3"
    ELECTRIC_NEXUS_TERMINAL = "item_port_power_terminal_1"
    FLUID_PUMP = "item_port_pump_1"
    ZIPLINE_PYLON = "item_port_travel_pole_1"
    ZIPLINE_TOWER = "item_port_travel_pole_2"


class FacilityCategory(str, Enum):
    """Build menu grouping."""
    SPECIAL = "special"
    LOGISTICS = "logistics"
    RESOURCING = "resourcing"
    DEPOT_ACCESS = "depot_access"
    PRODUCTION_I = "production_i"
    PRODUCTION_II = "production_ii"
    POWER = "power"
    MISC = "misc"
    FARMING = "farming"
    COMBAT = "combat"


# (x, y, direction) relative to the unrotated footprint
PortOffset = Tuple[int, int, str]
# (x, y, direction, belt|pipe, input|output, external)
FullPortSpec = Tuple[int, int, str, str, str, Optional[str]]
# Either a whole side of the footprint or an explicit offset list
PortLayout = Union[str, List[PortOffset]]


class AreaSpec(NamedTuple):
    """Rectangular area centred on a facility."""
    width: int
    height: int
    side: Optional[str] = None


class FacilityDefinition(NamedTuple):
    """Static catalog data for a facility type."""
    category: FacilityCategory
    width: int
    height: int
    power: Optional[float] = None
    power_area: Optional[AreaSpec] = None
    irrigation_area: Optional[AreaSpec] = None
    belt_inputs: Optional[PortLayout] = None
    belt_outputs: Optional[PortLayout] = None
    pipe_inputs: Optional[PortLayout] = None
    pipe_outputs: Optional[PortLayout] = None
    depot_inputs: Optional[List[PortOffset]] = None
    depot_outputs: Optional[List[PortOffset]] = None
    ports: Optional[List[FullPortSpec]] = None
    allowed_regions: Optional[List[RegionID]] = None
    pipe_ports_allowed_regions: Optional[List[RegionID]] = None
    depot_bus_connection_side: Optional[str] = None
    not_implemented_yet: bool = False


def define_ports(start_x: int, start_y: int, width: int, height: int,
                 direction: str) -> List[PortOffset]:
    """Port offsets covering a rectangle, column by column."""
    return [
        (start_x + x, start_y + y, direction)
        for x in range(width)
        for y in range(height)
    ]


def define_side_ports(width: int, height: int, side: str) -> List[PortOffset]:
    """Port offsets covering one whole side of a width x height footprint.

    Args:
        width: Footprint width
        height: Footprint height
        side: Side of the footprint, also used as the port direction

    Returns:
        Offsets ordered left to right (or top to bottom)
    """
    if side == "up":
        return define_ports(0, 0, width, 1, "up")
    if side == "down":
        return define_ports(0, height - 1, width, 1, "down")
    if side == "left":
        return define_ports(0, 0, 1, height, "left")
    if side == "right":
        return define_ports(width - 1, 0, 1, height, "right")
    raise ValueError(f"Unknown side: {side}")


_PAC_DEPOT_INPUTS = define_ports(1, 0, 7, 1, "up") + define_ports(1, 8, 7, 1, "down")
_PAC_DEPOT_OUTPUTS = [
    (0, 1, "left"), (0, 4, "left"), (0, 7, "left"),
    (8, 1, "right"), (8, 4, "right"), (8, 7, "right"),
]

_WULING = [RegionID.WULING]


def _placeholder(category: FacilityCategory, width: int, height: int,
                 **kwargs) -> FacilityDefinition:
    return FacilityDefinition(category, width, height, not_implemented_yet=True, **kwargs)


C = FacilityCategory

FACILITIES: Dict[FacilityID, FacilityDefinition] = {
    FacilityID.FITTING_UNIT: FacilityDefinition(
        C.PRODUCTION_I, 3, 3, power=20, belt_inputs="down", belt_outputs="up"),
    FacilityID.SEPARATING_UNIT: FacilityDefinition(
        C.PRODUCTION_II, 6, 4, power=20, belt_inputs="down", belt_outputs="up",
        pipe_outputs=[(0, 2, "left")], allowed_regions=_WULING),
    FacilityID.FLUID_SUPPLY_UNIT: FacilityDefinition(
        C.MISC, 3, 3, power=10,
        ports=[(1, 2, "down", "pipe", "input", "world")], allowed_regions=_WULING),
    FacilityID.FILLING_UNIT: FacilityDefinition(
        C.PRODUCTION_II, 6, 4, power=20, belt_inputs="down", belt_outputs="up",
        pipe_inputs=[(5, 2, "right")], allowed_regions=_WULING),
    FacilityID.REFINING_UNIT: FacilityDefinition(
        C.PRODUCTION_I, 3, 3, power=5, belt_inputs="down", belt_outputs="up"),
    FacilityID.SHREDDING_UNIT: FacilityDefinition(
        C.PRODUCTION_I, 3, 3, power=5, belt_inputs="down", belt_outputs="up"),
    FacilityID.FLUID_TANK: FacilityDefinition(
        C.DEPOT_ACCESS, 3, 3, pipe_inputs=[(1, 0, "down")], pipe_outputs=[(1, 2, "up")],
        allowed_regions=_WULING),
    FacilityID.DEPOT_LOADER: FacilityDefinition(
        C.DEPOT_ACCESS, 3, 1, depot_inputs=[(1, 0, "down")],
        depot_bus_connection_side="down"),
    FacilityID.DEPOT_BUS_SECTION: _placeholder(C.DEPOT_ACCESS, 8, 4, allowed_regions=_WULING),
    FacilityID.DEPOT_BUS_PORT: _placeholder(C.DEPOT_ACCESS, 4, 4, allowed_regions=_WULING),
    FacilityID.REACTOR_CRUCIBLE: FacilityDefinition(
        C.PRODUCTION_II, 5, 5, power=50,
        belt_inputs=[(1, 4, "down"), (3, 4, "down")],
        belt_outputs=[(1, 0, "up"), (3, 0, "up")],
        pipe_inputs=[(4, 1, "right"), (4, 3, "right")],
        pipe_outputs=[(0, 1, "left"), (0, 3, "left")],
        allowed_regions=_WULING),
    FacilityID.PLANTING_UNIT: FacilityDefinition(
        C.PRODUCTION_I, 5, 5, power=20, belt_inputs="down", belt_outputs="up",
        pipe_inputs=[(4, 2, "right")], pipe_ports_allowed_regions=_WULING),
    FacilityID.ELECTRIC_NEXUS: _placeholder(C.MISC, 1, 1),
    FacilityID.THERMAL_BANK: FacilityDefinition(C.POWER, 2, 2, belt_inputs="down"),
    FacilityID.SEED_PICKING_UNIT: FacilityDefinition(
        C.PRODUCTION_I, 5, 5, power=10, belt_inputs="down", belt_outputs="up"),
    FacilityID.MOULDING_UNIT: FacilityDefinition(
        C.PRODUCTION_I, 3, 3, power=10, belt_inputs="down", belt_outputs="up"),
    FacilityID.AKETINE_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.JINCAO_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.YAZHEN_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.BUCKFLOWER_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.CITROME_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.SANDLEAF_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.REED_RYE_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.TARTPEPPER_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.REDJADE_GINSENG_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.AMBER_RICE_PLOT: _placeholder(C.FARMING, 3, 3),
    FacilityID.PROTOCOL_AUTOMATION_CORE_PAC: FacilityDefinition(
        C.SPECIAL, 9, 9, depot_inputs=_PAC_DEPOT_INPUTS, depot_outputs=_PAC_DEPOT_OUTPUTS),
    FacilityID.SUB_PAC: FacilityDefinition(
        C.SPECIAL, 9, 9, depot_inputs=_PAC_DEPOT_INPUTS, depot_outputs=_PAC_DEPOT_OUTPUTS),
    FacilityID.SPRINKLER: FacilityDefinition(
        C.MISC, 3, 3, ports=[(1, 2, "down", "pipe", "input", "world")],
        irrigation_area=AreaSpec(5, 4, "up"), allowed_regions=_WULING),
    FacilityID.PROTOCOL_STASH: FacilityDefinition(
        C.DEPOT_ACCESS, 3, 3, belt_inputs="down", belt_outputs="up"),
    FacilityID.GRINDING_UNIT: FacilityDefinition(
        C.PRODUCTION_II, 6, 4, power=50, belt_inputs="down", belt_outputs="up"),
    FacilityID.PACKAGING_UNIT: FacilityDefinition(
        C.PRODUCTION_II, 6, 4, power=20, belt_inputs="down", belt_outputs="up"),
    FacilityID.DEPOT_UNLOADER: FacilityDefinition(
        C.DEPOT_ACCESS, 3, 1, depot_outputs=[(1, 0, "up")],
        depot_bus_connection_side="down"),
    FacilityID.GEARING_UNIT: FacilityDefinition(
        C.PRODUCTION_II, 6, 4, power=10, belt_inputs="down", belt_outputs="up"),
    FacilityID.FORGE_OF_THE_SKY: FacilityDefinition(
        C.PRODUCTION_II, 5, 5, power=50, belt_inputs="down", belt_outputs="up",
        pipe_inputs=[(4, 2, "right")], allowed_regions=_WULING),
    FacilityID.GRENADE_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.HE_GRENADE_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.MARSH_GAS_MK_I: _placeholder(C.COMBAT, 2, 2),
    FacilityID.LN_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.BEAM_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.SURGE_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.MEDICAL_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.OMNIDIRECTIONAL_SONIC_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.SENTRY_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.GUN_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.HEAVY_GUN_TOWER: _placeholder(C.COMBAT, 2, 2),
    FacilityID.EASY_STASH: _placeholder(C.MISC, 2, 2),
    FacilityID.MEMO_BEACON: _placeholder(C.MISC, 2, 2),
    FacilityID.PORTABLE_ORIGINIUM_RIG: _placeholder(C.RESOURCING, 2, 2),
    FacilityID.ELECTRIC_MINING_RIG: _placeholder(C.RESOURCING, 2, 2),
    FacilityID.ELECTRIC_MINING_RIG_MK_II: _placeholder(C.RESOURCING, 2, 2),
    FacilityID.ELECTRIC_PYLON: FacilityDefinition(
        C.POWER, 2, 2, power_area=AreaSpec(12, 12)),
    FacilityID.XIRANITE_PYLON: FacilityDefinition(
        C.POWER, 2, 2, power_area=AreaSpec(12, 12), allowed_regions=_WULING),
    FacilityID.RELAY_TOWER: FacilityDefinition(
        C.POWER, 3, 3, power_area=AreaSpec(7, 7)),
    FacilityID.XIRANITE_RELAY: FacilityDefinition(
        C.POWER, 3, 3, power_area=AreaSpec(7, 7), allowed_regions=_WULING),
    FacilityID.ELECTRIC_NEXUS_TERMINAL: _placeholder(C.MISC, 2, 2),
    FacilityID.FLUID_PUMP: FacilityDefinition(
        C.RESOURCING, 3, 3, ports=[(1, 2, "down", "pipe", "output", "world")],
        allowed_regions=_WULING),
    FacilityID.ZIPLINE_PYLON: _placeholder(C.MISC, 2, 2),
    FacilityID.ZIPLINE_TOWER: _placeholder(C.MISC, 2, 2),
}

del C


def get_facility_definition(facility_type: str) -> Optional[FacilityDefinition]:
    """Look up a facility definition by type id."""
    return FACILITIES.get(facility_type)


def has_pipe_ports(definition: FacilityDefinition) -> bool:
    """True if the facility exposes any pipe port."""
    if definition.pipe_inputs or definition.pipe_outputs:
        return True
    return any(port[3] == "pipe" for port in definition.ports or [])

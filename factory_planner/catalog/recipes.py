"""Recipe catalog.

Rates are expressed per crafting cycle; divide by ``time`` (seconds) to get
items per second. Thermal bank recipes produce power instead of items.
"""

from typing import Dict, List, NamedTuple, Optional

from .facilities import FacilityID
from .items import ItemID


class Recipe(NamedTuple):
    """A single crafting recipe."""
    id: str
    facility_id: FacilityID
    time: float
    inputs: Dict[str, int]
    outputs: Dict[str, int]
    power_output: Optional[float] = None


def _recipe(recipe_id: str, facility_id: FacilityID, time: float,
            inputs: Dict[str, int], outputs: Dict[str, int],
            power_output: Optional[float] = None) -> Recipe:
    return Recipe(recipe_id, facility_id, time, inputs, outputs, power_output)


_RECIPE_LIST: List[Recipe] = [
    _recipe("component_glass_cmpt_1", FacilityID.FITTING_UNIT, 2,
            {ItemID.AMETHYST_FIBER: 1},
            {ItemID.AMETHYST_PART: 1}),
    _recipe("component_glass_enr_cmpt_1", FacilityID.FITTING_UNIT, 2,
            {ItemID.CRYSTON_FIBER: 1},
            {ItemID.CRYSTON_PART: 1}),
    _recipe("component_iron_cmpt_1", FacilityID.FITTING_UNIT, 2,
            {ItemID.FERRIUM: 1},
            {ItemID.FERRIUM_PART: 1}),
    _recipe("component_iron_enr_cmpt_1", FacilityID.FITTING_UNIT, 2,
            {ItemID.STEEL: 1},
            {ItemID.STEEL_PART: 1}),
    _recipe("dismantler_glass_grass_1_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1},
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1}),
    _recipe("dismantler_glass_grass_2_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1},
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1}),
    _recipe("dismantler_glass_water_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1},
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.CLEAN_WATER: 1}),
    _recipe("dismantler_glass_xiranite_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1},
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1}),
    _recipe("dismantler_glassenr_grass_1_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1},
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1}),
    _recipe("dismantler_glassenr_grass_2_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1},
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1}),
    _recipe("dismantler_glassenr_water_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1},
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.CLEAN_WATER: 1}),
    _recipe("dismantler_glassenr_xiranite_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1},
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1}),
    _recipe("dismantler_iron_grass_1_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1},
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1}),
    _recipe("dismantler_iron_grass_2_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1},
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1}),
    _recipe("dismantler_iron_water_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1},
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.CLEAN_WATER: 1}),
    _recipe("dismantler_iron_xiranite_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1},
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1}),
    _recipe("dismantler_ironenr_grass_1_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1},
            {ItemID.STEEL_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1}),
    _recipe("dismantler_ironenr_grass_2_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1},
            {ItemID.STEEL_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1}),
    _recipe("dismantler_ironenr_water_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1},
            {ItemID.STEEL_BOTTLE: 1, ItemID.CLEAN_WATER: 1}),
    _recipe("dismantler_ironenr_xiranite_1", FacilityID.SEPARATING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1},
            {ItemID.STEEL_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1}),
    _recipe("filling_bottled_food_1_1", FacilityID.FILLING_UNIT, 10,
            {ItemID.AMETHYST_BOTTLE: 5, ItemID.CITROME_POWDER: 5},
            {ItemID.CANNED_CITROME_C: 1}),
    _recipe("filling_bottled_food_2_1", FacilityID.FILLING_UNIT, 10,
            {ItemID.FERRIUM_BOTTLE: 10, ItemID.CITROME_POWDER: 10},
            {ItemID.CANNED_CITROME_B: 1}),
    _recipe("filling_bottled_food_3_1", FacilityID.FILLING_UNIT, 10,
            {ItemID.STEEL_BOTTLE: 10, ItemID.GROUND_CITROME_POWDER: 10},
            {ItemID.CANNED_CITROME_A: 1}),
    _recipe("filling_bottled_glass_grass_1", FacilityID.FILLING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1},
            {ItemID.AMETHYST_BOTTLE: 1}),
    _recipe("filling_bottled_glass_grass_2", FacilityID.FILLING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1},
            {ItemID.AMETHYST_BOTTLE: 1}),
    _recipe("filling_bottled_glass_water", FacilityID.FILLING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.AMETHYST_BOTTLE: 1}),
    _recipe("filling_bottled_glass_xiranite", FacilityID.FILLING_UNIT, 2,
            {ItemID.AMETHYST_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1},
            {ItemID.AMETHYST_BOTTLE: 1}),
    _recipe("filling_bottled_glassenr_grass_1", FacilityID.FILLING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1},
            {ItemID.CRYSTON_BOTTLE: 1}),
    _recipe("filling_bottled_glassenr_grass_2", FacilityID.FILLING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1},
            {ItemID.CRYSTON_BOTTLE: 1}),
    _recipe("filling_bottled_glassenr_water", FacilityID.FILLING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.CRYSTON_BOTTLE: 1}),
    _recipe("filling_bottled_glassenr_xiranite", FacilityID.FILLING_UNIT, 2,
            {ItemID.CRYSTON_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1},
            {ItemID.CRYSTON_BOTTLE: 1}),
    _recipe("filling_bottled_iron_grass_1", FacilityID.FILLING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1},
            {ItemID.FERRIUM_BOTTLE: 1}),
    _recipe("filling_bottled_iron_grass_2", FacilityID.FILLING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1},
            {ItemID.FERRIUM_BOTTLE: 1}),
    _recipe("filling_bottled_iron_water", FacilityID.FILLING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.FERRIUM_BOTTLE: 1}),
    _recipe("filling_bottled_iron_xiranite", FacilityID.FILLING_UNIT, 2,
            {ItemID.FERRIUM_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1},
            {ItemID.FERRIUM_BOTTLE: 1}),
    _recipe("filling_bottled_ironenr_grass_1", FacilityID.FILLING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1, ItemID.JINCAO_SOLUTION: 1},
            {ItemID.STEEL_BOTTLE: 1}),
    _recipe("filling_bottled_ironenr_grass_2", FacilityID.FILLING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1, ItemID.YAZHEN_SOLUTION: 1},
            {ItemID.STEEL_BOTTLE: 1}),
    _recipe("filling_bottled_ironenr_water", FacilityID.FILLING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.STEEL_BOTTLE: 1}),
    _recipe("filling_bottled_ironenr_xiranite", FacilityID.FILLING_UNIT, 2,
            {ItemID.STEEL_BOTTLE: 1, ItemID.LIQUID_XIRANITE: 1},
            {ItemID.STEEL_BOTTLE: 1}),
    _recipe("filling_bottled_rec_hp_1_1", FacilityID.FILLING_UNIT, 10,
            {ItemID.AMETHYST_BOTTLE: 5, ItemID.BUCKFLOWER_POWDER: 5},
            {ItemID.BUCK_CAPSULE_C: 1}),
    _recipe("filling_bottled_rec_hp_2_1", FacilityID.FILLING_UNIT, 10,
            {ItemID.FERRIUM_BOTTLE: 10, ItemID.BUCKFLOWER_POWDER: 10},
            {ItemID.BUCK_CAPSULE_B: 1}),
    _recipe("filling_bottled_rec_hp_3_1", FacilityID.FILLING_UNIT, 10,
            {ItemID.STEEL_BOTTLE: 10, ItemID.GROUND_BUCKFLOWER_POWDER: 10},
            {ItemID.BUCK_CAPSULE_A: 1}),
    _recipe("furnance_carbon_enr_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.STABILIZED_CARBON: 1},
            {ItemID.STABILIZED_CARBON: 1}),
    _recipe("furnance_carbon_enr_powder_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.GROUND_BUCKFLOWER_POWDER: 1},
            {ItemID.STABILIZED_CARBON: 1}),
    _recipe("furnance_carbon_enr_powder_2", FacilityID.REFINING_UNIT, 2,
            {ItemID.GROUND_CITROME_POWDER: 1},
            {ItemID.STABILIZED_CARBON: 1}),
    _recipe("furnance_carbon_material_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.BUCKFLOWER: 1},
            {ItemID.CARBON: 1}),
    _recipe("furnance_carbon_material_2", FacilityID.REFINING_UNIT, 2,
            {ItemID.CITROME: 1},
            {ItemID.CARBON: 1}),
    _recipe("furnance_carbon_material_3", FacilityID.REFINING_UNIT, 2,
            {ItemID.SANDLEAF: 1},
            {ItemID.CARBON: 1}),
    _recipe("furnance_carbon_material_4", FacilityID.REFINING_UNIT, 2,
            {ItemID.WOOD: 1},
            {ItemID.CARBON: 1}),
    _recipe("furnance_carbon_material_5", FacilityID.REFINING_UNIT, 2,
            {ItemID.JINCAO: 1},
            {ItemID.CARBON: 2}),
    _recipe("furnance_carbon_material_6", FacilityID.REFINING_UNIT, 2,
            {ItemID.YAZHEN: 1},
            {ItemID.CARBON: 2}),
    _recipe("furnance_carbon_powder_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.BUCKFLOWER_POWDER: 1},
            {ItemID.CARBON_POWDER: 1}),
    _recipe("furnance_carbon_powder_2", FacilityID.REFINING_UNIT, 2,
            {ItemID.CITROME_POWDER: 1},
            {ItemID.CARBON_POWDER: 1}),
    _recipe("furnance_carbon_powder_3", FacilityID.REFINING_UNIT, 2,
            {ItemID.SANDLEAF_POWDER: 3},
            {ItemID.CARBON_POWDER: 2}),
    _recipe("furnance_carbon_powder_4", FacilityID.REFINING_UNIT, 2,
            {ItemID.JINCAO_POWDER: 1},
            {ItemID.CARBON_POWDER: 2}),
    _recipe("furnance_carbon_powder_5", FacilityID.REFINING_UNIT, 2,
            {ItemID.YAZHEN_POWDER: 1},
            {ItemID.CARBON_POWDER: 2}),
    _recipe("furnance_crystal_enr_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.PACKED_ORIGOCRUST: 1},
            {ItemID.PACKED_ORIGOCRUST: 1}),
    _recipe("furnance_crystal_enr_powder_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.DENSE_ORIGINIUM_POWDER: 1},
            {ItemID.PACKED_ORIGOCRUST: 1}),
    _recipe("furnance_crystal_powder_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.ORIGINIUM_POWDER: 1},
            {ItemID.ORIGOCRUST_POWDER: 1}),
    _recipe("furnance_crystal_shell_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.ORIGINIUM_ORE: 1},
            {ItemID.ORIGOCRUST: 1}),
    _recipe("furnance_crystal_shell_2", FacilityID.REFINING_UNIT, 2,
            {ItemID.ORIGOCRUST_POWDER: 1},
            {ItemID.ORIGOCRUST: 1}),
    _recipe("furnance_iron_enr_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.DENSE_FERRIUM_POWDER: 1},
            {ItemID.STEEL: 1}),
    _recipe("furnance_iron_nugget_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.FERRIUM_ORE: 1},
            {ItemID.FERRIUM: 1}),
    _recipe("furnance_iron_nugget_2", FacilityID.REFINING_UNIT, 2,
            {ItemID.FERRIUM_POWDER: 1},
            {ItemID.FERRIUM: 1}),
    _recipe("furnance_quartz_enr_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.CRYSTON_POWDER: 1},
            {ItemID.CRYSTON_FIBER: 1}),
    _recipe("furnance_quartz_glass_1", FacilityID.REFINING_UNIT, 2,
            {ItemID.AMETHYST_ORE: 1},
            {ItemID.AMETHYST_FIBER: 1}),
    _recipe("furnance_quartz_glass_2", FacilityID.REFINING_UNIT, 2,
            {ItemID.AMETHYST_POWDER: 1},
            {ItemID.AMETHYST_FIBER: 1}),
    _recipe("grinder_carbon_powder_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.CARBON: 1},
            {ItemID.CARBON_POWDER: 2}),
    _recipe("grinder_crystal_powder_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.ORIGOCRUST: 1},
            {ItemID.ORIGOCRUST_POWDER: 1}),
    _recipe("grinder_iron_powder_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.FERRIUM: 1},
            {ItemID.FERRIUM_POWDER: 1}),
    _recipe("grinder_originium_powder_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.ORIGINIUM_ORE: 1},
            {ItemID.ORIGINIUM_POWDER: 1}),
    _recipe("grinder_plant_bbflower_powder_1_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.AKETINE: 1},
            {ItemID.AKETINE_POWDER: 2}),
    _recipe("grinder_plant_grass_powder_1_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.JINCAO: 1},
            {ItemID.JINCAO_POWDER: 2}),
    _recipe("grinder_plant_grass_powder_2_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.YAZHEN: 1},
            {ItemID.YAZHEN_POWDER: 2}),
    _recipe("grinder_plant_moss_powder_1_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.BUCKFLOWER: 1},
            {ItemID.BUCKFLOWER_POWDER: 2}),
    _recipe("grinder_plant_moss_powder_2_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.CITROME: 1},
            {ItemID.CITROME_POWDER: 2}),
    _recipe("grinder_plant_moss_powder_3_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.SANDLEAF: 1},
            {ItemID.SANDLEAF_POWDER: 3}),
    _recipe("grinder_quartz_powder_1", FacilityID.SHREDDING_UNIT, 2,
            {ItemID.AMETHYST_FIBER: 1},
            {ItemID.AMETHYST_POWDER: 1}),
    _recipe("planter_plant_bbflower_1", FacilityID.PLANTING_UNIT, 2,
            {ItemID.AKETINE_SEED: 1},
            {ItemID.AKETINE: 1}),
    _recipe("planter_plant_grass_1_1", FacilityID.PLANTING_UNIT, 2,
            {ItemID.JINCAO_SEED: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.JINCAO: 2}),
    _recipe("planter_plant_grass_2_1", FacilityID.PLANTING_UNIT, 2,
            {ItemID.YAZHEN_SEED: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.YAZHEN: 2}),
    _recipe("planter_plant_moss_1_1", FacilityID.PLANTING_UNIT, 2,
            {ItemID.BUCKFLOWER_SEED: 1},
            {ItemID.BUCKFLOWER: 1}),
    _recipe("planter_plant_moss_2_1", FacilityID.PLANTING_UNIT, 2,
            {ItemID.CITROME_SEED: 1},
            {ItemID.CITROME: 1}),
    _recipe("planter_plant_moss_3_1", FacilityID.PLANTING_UNIT, 2,
            {ItemID.SANDLEAF_SEED: 1},
            {ItemID.SANDLEAF: 1}),
    _recipe("pool_liquid_liquid_xiranite_1", FacilityID.REACTOR_CRUCIBLE, 2,
            {ItemID.XIRANITE: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.LIQUID_XIRANITE: 1}),
    _recipe("pool_liquid_plant_grass_1_1", FacilityID.REACTOR_CRUCIBLE, 2,
            {ItemID.JINCAO_POWDER: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.JINCAO_SOLUTION: 1}),
    _recipe("pool_liquid_plant_grass_2_1", FacilityID.REACTOR_CRUCIBLE, 2,
            {ItemID.YAZHEN_POWDER: 1, ItemID.CLEAN_WATER: 1},
            {ItemID.YAZHEN_SOLUTION: 1}),
    _recipe("seedcollector_plant_bbflower_1", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.AKETINE: 1},
            {ItemID.AKETINE_SEED: 2}),
    _recipe("seedcollector_plant_grass_1_1", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.JINCAO: 1},
            {ItemID.JINCAO_SEED: 1}),
    _recipe("seedcollector_plant_grass_2_1", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.YAZHEN: 1},
            {ItemID.YAZHEN_SEED: 1}),
    _recipe("seedcollector_plant_moss_1_1", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.BUCKFLOWER: 1},
            {ItemID.BUCKFLOWER_SEED: 2}),
    _recipe("seedcollector_plant_moss_2_1", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.CITROME: 1},
            {ItemID.CITROME_SEED: 2}),
    _recipe("seedcollector_plant_moss_3_1", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.SANDLEAF: 1},
            {ItemID.SANDLEAF_SEED: 2}),
    _recipe("seedcollector_plant_sp_1", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.REED_RYE: 1},
            {ItemID.REED_RYE_SEED: 2}),
    _recipe("seedcollector_plant_sp_2", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.TARTPEPPER: 1},
            {ItemID.TARTPEPPER_SEED: 2}),
    _recipe("seedcollector_plant_sp_3", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.REDJADE_GINSENG: 1},
            {ItemID.REDJADE_GINSENG_SEED: 2}),
    _recipe("seedcollector_plant_sp_4", FacilityID.SEED_PICKING_UNIT, 2,
            {ItemID.AMBER_RICE: 1},
            {ItemID.AMBER_RICE_SEED: 2}),
    _recipe("shaper_glass_bottle_1", FacilityID.MOULDING_UNIT, 2,
            {ItemID.AMETHYST_FIBER: 2},
            {ItemID.AMETHYST_BOTTLE: 1}),
    _recipe("shaper_glass_enr_bottle_1", FacilityID.MOULDING_UNIT, 2,
            {ItemID.CRYSTON_FIBER: 2},
            {ItemID.CRYSTON_BOTTLE: 1}),
    _recipe("shaper_iron_bottle_1", FacilityID.MOULDING_UNIT, 2,
            {ItemID.FERRIUM: 2},
            {ItemID.FERRIUM_BOTTLE: 1}),
    _recipe("shaper_iron_enr_bottle_1", FacilityID.MOULDING_UNIT, 2,
            {ItemID.STEEL: 2},
            {ItemID.STEEL_BOTTLE: 1}),
    _recipe("thickener_carbon_enr_powder_1", FacilityID.GRINDING_UNIT, 2,
            {ItemID.CARBON_POWDER: 2, ItemID.SANDLEAF_POWDER: 1},
            {ItemID.DENSE_CARBON_POWDER: 1}),
    _recipe("thickener_crystal_enr_powder_1", FacilityID.GRINDING_UNIT, 2,
            {ItemID.ORIGOCRUST_POWDER: 2, ItemID.SANDLEAF_POWDER: 1},
            {ItemID.DENSE_ORIGOCRUST_POWDER: 1}),
    _recipe("thickener_iron_enr_powder_1", FacilityID.GRINDING_UNIT, 2,
            {ItemID.FERRIUM_POWDER: 2, ItemID.SANDLEAF_POWDER: 1},
            {ItemID.DENSE_FERRIUM_POWDER: 1}),
    _recipe("thickener_originium_enr_powder_1", FacilityID.GRINDING_UNIT, 2,
            {ItemID.ORIGINIUM_POWDER: 2, ItemID.SANDLEAF_POWDER: 1},
            {ItemID.DENSE_ORIGINIUM_POWDER: 1}),
    _recipe("thickener_plant_moss_enr_powder_1_1", FacilityID.GRINDING_UNIT, 2,
            {ItemID.BUCKFLOWER_POWDER: 2, ItemID.SANDLEAF_POWDER: 1},
            {ItemID.GROUND_BUCKFLOWER_POWDER: 1}),
    _recipe("thickener_plant_moss_enr_powder_2_1", FacilityID.GRINDING_UNIT, 2,
            {ItemID.CITROME_POWDER: 2, ItemID.SANDLEAF_POWDER: 1},
            {ItemID.GROUND_CITROME_POWDER: 1}),
    _recipe("thickener_quartz_enr_powder_1", FacilityID.GRINDING_UNIT, 2,
            {ItemID.AMETHYST_POWDER: 2, ItemID.SANDLEAF_POWDER: 1},
            {ItemID.CRYSTON_POWDER: 1}),
    _recipe("tools_proc_battery_1_1", FacilityID.PACKAGING_UNIT, 10,
            {ItemID.AMETHYST_PART: 5, ItemID.ORIGINIUM_POWDER: 10},
            {ItemID.LC_VALLEY_BATTERY: 1}),
    _recipe("tools_proc_battery_2_1", FacilityID.PACKAGING_UNIT, 10,
            {ItemID.FERRIUM_PART: 10, ItemID.ORIGINIUM_POWDER: 15},
            {ItemID.SC_VALLEY_BATTERY: 1}),
    _recipe("tools_proc_battery_3_1", FacilityID.PACKAGING_UNIT, 10,
            {ItemID.STEEL_PART: 10, ItemID.DENSE_ORIGINIUM_POWDER: 15},
            {ItemID.HC_VALLEY_BATTERY: 1}),
    _recipe("tools_proc_battery_4_1", FacilityID.PACKAGING_UNIT, 10,
            {ItemID.XIRANITE: 5, ItemID.DENSE_ORIGINIUM_POWDER: 15},
            {ItemID.LC_WULING_BATTERY: 1}),
    _recipe("tools_proc_bomb_1_1", FacilityID.PACKAGING_UNIT, 10,
            {ItemID.AMETHYST_PART: 5, ItemID.AKETINE_POWDER: 1},
            {ItemID.INDUSTRIAL_EXPLOSIVE: 1}),
    _recipe("tools_proc_food_4_1", FacilityID.PACKAGING_UNIT, 10,
            {ItemID.FERRIUM_PART: 10, ItemID.FERRIUM_BOTTLE: 5},
            {ItemID.JINCAO_DRINK: 1}),
    _recipe("tools_proc_rec_hp_4_1", FacilityID.PACKAGING_UNIT, 10,
            {ItemID.FERRIUM_PART: 10, ItemID.FERRIUM_BOTTLE: 5},
            {ItemID.YAZHEN_SYRINGE_C: 1}),
    _recipe("winder_equip_script_1", FacilityID.GEARING_UNIT, 10,
            {ItemID.ORIGOCRUST: 5, ItemID.AMETHYST_FIBER: 5},
            {ItemID.AMETHYST_COMPONENT: 1}),
    _recipe("winder_equip_script_2", FacilityID.GEARING_UNIT, 10,
            {ItemID.ORIGOCRUST: 10, ItemID.FERRIUM: 10},
            {ItemID.FERRIUM_COMPONENT: 1}),
    _recipe("winder_equip_script_3", FacilityID.GEARING_UNIT, 10,
            {ItemID.PACKED_ORIGOCRUST: 10, ItemID.CRYSTON_FIBER: 10},
            {ItemID.CRYSTON_COMPONENT: 1}),
    _recipe("winder_equip_script_4", FacilityID.GEARING_UNIT, 10,
            {ItemID.PACKED_ORIGOCRUST: 10, ItemID.XIRANITE: 10},
            {ItemID.XIRANITE_COMPONENT: 1}),
    _recipe("xiranite_oven_muck_xiranite_1", FacilityID.FORGE_OF_THE_SKY, 2,
            {ItemID.BURDO_MUCK: 1, ItemID.LIQUID_XIRANITE: 1},
            {ItemID.BUMPER_RICH: 1}),
    _recipe("xiranite_oven_xiranite_powder_1", FacilityID.FORGE_OF_THE_SKY, 2,
            {ItemID.STABILIZED_CARBON: 2, ItemID.CLEAN_WATER: 1},
            {ItemID.XIRANITE: 1}),
    _recipe("power_sta_originium_ore", FacilityID.THERMAL_BANK, 8,
            {ItemID.ORIGINIUM_ORE: 1},
            {}, power_output=50),
    _recipe("power_sta_proc_battery_1", FacilityID.THERMAL_BANK, 40,
            {ItemID.LC_VALLEY_BATTERY: 1},
            {}, power_output=220),
    _recipe("power_sta_proc_battery_2", FacilityID.THERMAL_BANK, 40,
            {ItemID.SC_VALLEY_BATTERY: 1},
            {}, power_output=420),
    _recipe("power_sta_proc_battery_3", FacilityID.THERMAL_BANK, 40,
            {ItemID.HC_VALLEY_BATTERY: 1},
            {}, power_output=1100),
    _recipe("power_sta_proc_battery_4", FacilityID.THERMAL_BANK, 40,
            {ItemID.LC_WULING_BATTERY: 1},
            {}, power_output=1600),
]

RECIPES: Dict[str, Recipe] = {recipe.id: recipe for recipe in _RECIPE_LIST}


def recipes_for_facility(facility_type: str) -> List[Recipe]:
    """All recipes a facility type can run, in catalog order."""
    return [recipe for recipe in RECIPES.values() if recipe.facility_id == facility_type]


def facility_has_recipes(facility_type: str) -> bool:
    return any(recipe.facility_id == facility_type for recipe in RECIPES.values())

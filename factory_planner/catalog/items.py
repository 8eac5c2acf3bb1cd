"""Item Catalog

Every item that can travel along a belt or pipe, keyed by its stable game id.
Fluids can only be carried by pipes; everything else rides on belts.
"""

from enum import Enum
from typing import Dict, NamedTuple


class ItemID(str, Enum):
    """Stable item identifiers."""
    CANNED_CITROME_C = "item_bottled_food_1"
    CANNED_CITROME_B = "item_bottled_food_2"
    CANNED_CITROME_A = "item_bottled_food_3"
    JINCAO_DRINK = "item_bottled_food_4"
    BUCK_CAPSULE_C = "item_bottled_rec_hp_1"
    BUCK_CAPSULE_B = "item_bottled_rec_hp_2"
    BUCK_CAPSULE_A = "item_bottled_rec_hp_3"
    YAZHEN_SYRINGE_C = "item_bottled_rec_hp_4"
    STABILIZED_CARBON = "item_carbon_enr"
    DENSE_CARBON_POWDER = "item_carbon_enr_powder"
    CARBON = "item_carbon_mtl"
    CARBON_POWDER = "item_carbon_powder"
    PACKED_ORIGOCRUST = "item_crystal_enr"
    DENSE_ORIGOCRUST_POWDER = "item_crystal_enr_powder"
    ORIGOCRUST_POWDER = "item_crystal_powder"
    ORIGOCRUST = "item_crystal_shell"
    AMETHYST_COMPONENT = "item_equip_script_1"
    FERRIUM_COMPONENT = "item_equip_script_2"
    CRYSTON_COMPONENT = "item_equip_script_3"
    XIRANITE_COMPONENT = "item_equip_script_4"
    AMETHYST_BOTTLE = "item_glass_bottle"
    AMETHYST_PART = "item_glass_cmpt"
    CRYSTON_BOTTLE = "item_glass_enr_bottle"
    CRYSTON_PART = "item_glass_enr_cmpt"
    FERRIUM_BOTTLE = "item_iron_bottle"
    FERRIUM_PART = "item_iron_cmpt"
    STEEL = "item_iron_enr"
    STEEL_BOTTLE = "item_iron_enr_bottle"
    STEEL_PART = "item_iron_enr_cmpt"
    DENSE_FERRIUM_POWDER = "item_iron_enr_powder"
    FERRIUM = "item_iron_nugget"
    FERRIUM_ORE = "item_iron_ore"
    FERRIUM_POWDER = "item_iron_powder"
    JINCAO_SOLUTION = "item_liquid_plant_grass_1"
    YAZHEN_SOLUTION = "item_liquid_plant_grass_2"
    CLEAN_WATER = "item_liquid_water"
    LIQUID_XIRANITE = "item_liquid_xiranite"
    TRANSPORT_BELT = "item_log_belt_01"
    ITEM_CONTROL_PORT = "item_log_conditioner"
    BELT_BRIDGE = "item_log_connector"
    CONVERGER = "item_log_converger"
    PIPE = "item_log_pipe_01"
    PIPE_CONTROL_PORT = "item_log_pipe_conditioner"
    PIPE_BRIDGE = "item_log_pipe_connector"
    PIPE_CONVERGER = "item_log_pipe_converger"
    PIPE_SPLITTER = "item_log_pipe_splitter"
    SPLITTER = "item_log_splitter"
    BURDO_MUCK = "item_muck_feces_1"
    BUMPER_RICH = "item_muck_xiranite_1"
    DENSE_ORIGINIUM_POWDER = "item_originium_enr_powder"
    ORIGINIUM_ORE = "item_originium_ore"
    ORIGINIUM_POWDER = "item_originium_powder"
    AKETINE = "item_plant_bbflower_1"
    AKETINE_POWDER = "item_plant_bbflower_powder_1"
    AKETINE_SEED = "item_plant_bbflower_seed_1"
    JINCAO = "item_plant_grass_1"
    YAZHEN = "item_plant_grass_2"
    JINCAO_POWDER = "item_plant_grass_powder_1"
    YAZHEN_POWDER = "item_plant_grass_powder_2"
    JINCAO_SEED = "item_plant_grass_seed_1"
    YAZHEN_SEED = "item_plant_grass_seed_2"
    BUCKFLOWER = "item_plant_moss_1"
    CITROME = "item_plant_moss_2"
    SANDLEAF = "item_plant_moss_3"
    GROUND_BUCKFLOWER_POWDER = "item_plant_moss_enr_powder_1"
    GROUND_CITROME_POWDER = "item_plant_moss_enr_powder_2"
    BUCKFLOWER_POWDER = "item_plant_moss_powder_1"
    CITROME_POWDER = "item_plant_moss_powder_2"
    SANDLEAF_POWDER = "item_plant_moss_powder_3"
    BUCKFLOWER_SEED = "item_plant_moss_seed_1"
    CITROME_SEED = "item_plant_moss_seed_2"
    SANDLEAF_SEED = "item_plant_moss_seed_3"
    REED_RYE = "item_plant_sp_1"
    TARTPEPPER = "item_plant_sp_2"
    REDJADE_GINSENG = "item_plant_sp_3"
    AMBER_RICE = "item_plant_sp_4"
    REED_RYE_SEED = "item_plant_sp_seed_1"
    TARTPEPPER_SEED = "item_plant_sp_seed_2"
    REDJADE_GINSENG_SEED = "item_plant_sp_seed_3"
    AMBER_RICE_SEED = "item_plant_sp_seed_4"
    WOOD = "item_plant_tundra_wood"
    LC_VALLEY_BATTERY = "item_proc_battery_1"
    SC_VALLEY_BATTERY = "item_proc_battery_2"
    HC_VALLEY_BATTERY = "item_proc_battery_3"
    LC_WULING_BATTERY = "item_proc_battery_4"
    INDUSTRIAL_EXPLOSIVE = "item_proc_bomb_1"
    CRYSTON_FIBER = "item_quartz_enr"
    CRYSTON_POWDER = "item_quartz_enr_powder"
    AMETHYST_FIBER = "item_quartz_glass"
    AMETHYST_POWDER = "item_quartz_powder"
    AMETHYST_ORE = "item_quartz_sand"
    XIRANITE = "item_xiranite_powder"
    CONDUCTIVE_EFFIGY_STONE = "item_drop_agdisk_1"
    HOLLOW_AGGAGRIT = "item_drop_agfly_1"
    HARD_AGGAGRIT = "item_drop_agmelee_1"
    ENERGIZED_AGGAGRIT = "item_drop_agrange_1"
    NATURAL_CHRYSOPOLIS_INGOT = "item_drop_agshield_1"
    FILLET = "item_drop_dog_1"
    PUNGENT_JERKY = "item_drop_erhound_1"
    CHROMATIC_LIPIDS = "item_drop_firebat_1"
    GROVENYMPH_PUPA = "item_drop_hscrane_1"
    WATERLAMP_GLOWBULB = "item_drop_hsfly_1"
    QUILLBEAST_LIVER = "item_drop_hshog_1"
    QINGBO_BAMBOO_CHIMES = "item_drop_hsmino_1"
    YOUNG_BAMBOO_SPROUT = "item_drop_hsmob_1"
    RAKERBEAST_LONGFUR = "item_drop_hstiger_1"
    HAZE_SOAKED_BALLISTA = "item_drop_hvybow_1"
    POWDERED_GRASS_SEED = "item_drop_lbmob_1"
    SIEGEBREAKER_GAUNTLETS = "item_drop_lbroshan_1"
    CARTILAGE_BIT = "item_drop_lbshamman_1"
    BITTER_FLOUR = "item_drop_lbshield_1"
    SHATTERED_AXE_BLADE = "item_drop_lbtough_1"
    NIDWYRM_WHISKERS = "item_drop_mimicw_1"
    AXEHORN = "item_drop_sandb_1"
    SLUG_MEAT = "item_drop_slimeml_1"
    INSTANT_VINTAGE = "item_drop_wgabyss_1"
    BLACK_TREACLE = "item_drop_wgshoal_1"
    RESILIENT_WATER = "item_drop_wgslime_1"
    NATURAL_SPARKLING_WATER = "item_drop_wgthorns_1"
    CRYSTON_BOTTLE_LIQUID = "item_galss_enr_bottle_liquid"
    AMETHYST_BOTTLE_LIQUID = "item_glass_bottle_liquid"
    FERRIUM_BOTTLE_LIQUID = "item_iron_bottle_liquid"
    STEEL_BOTTLE_LIQUID = "item_iron_enr_bottle_liquid"
    KALKODENDRA = "item_plant_crylplant_1_1"
    CHRYSODENDRA = "item_plant_crylplant_1_2"
    VITRODENDRA = "item_plant_crylplant_1_3"
    BLIGHTED_JADELEAF = "item_plant_crylplant_2_1"
    FALSE_AGGELA = "item_plant_crylplant_2_2"
    FLUFFED_JINCAO = "item_plant_grass_spc_1"
    THORNY_YAZHEN = "item_plant_grass_spc_2"
    FIREBUCKLE = "item_plant_moss_spc_1"
    UMBRALINE = "item_plant_moss_spc_2"
    PINK_BOLETE = "item_plant_mushroom_1_1"
    RED_BOLETE = "item_plant_mushroom_1_2"
    RUBY_BOLETE = "item_plant_mushroom_1_3"
    BLOODCAP = "item_plant_mushroom_2_1"
    COSMAGARIC = "item_plant_mushroom_2_2"
    KALKONYX = "item_plant_spcstone_1_1"
    AURONYX = "item_plant_spcstone_1_2"
    UMBRONYX = "item_plant_spcstone_1_3"
    IGNEOSITE = "item_plant_spcstone_2_1"
    WULINGSTONE = "item_plant_spcstone_2_2"
    PLANT_MATTER = "item_plant_tundra_impts"
    GLOWBUG = "item_plant_tundra_insect_1"
    SCORCHBUG = "item_plant_tundra_insect_2"
    GLOWBUG_POWDER = "item_plant_tundra_insect_powder_1"
    SCORCHBUG_POWDER = "item_plant_tundra_insect_powder_2"
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
    ORIPATHY_SUPPRESSANT = "item_quest_e1m5_inhibit"
    AEROSPACE_MATERIAL_I = "item_spaceship_cmpt_1"
    AEROSPACE_MATERIAL_II = "item_spaceship_cmpt_2"
    BUCKPILL_S = "item_bottled_flower1spc_1"
    BUCKPILL_L = "item_bottled_flower1spc_2"
    BUCKPILL_RF = "item_bottled_flower1spc_3"
    CITROMIX_S = "item_bottled_flower2spc_1"
    CITROMIX_L = "item_bottled_flower2spc_2"
    CITROMIX_RF = "item_bottled_flower2spc_3"
    JINCAO_TISANE = "item_bottled_grass1spc_1"
    JINCAO_INFUSION = "item_bottled_grass1spc_2"
    YAZHEN_SPRAY_S = "item_bottled_grass2spc_1"
    YAZHEN_SPRAY_L = "item_bottled_grass2spc_2"
    ARTS_VIAL = "item_bottled_insec1_1"
    ARTS_TUBE = "item_bottled_insec1_2"
    BIZARRO_CHILL = "item_bottled_moss_2_animal_1"
    VALLEY_PIE = "item_corp1_animal_1"
    MEAT_STIR_FRY = "item_corp2_animal_1"
    GARDEN_FRIED_RICE = "item_corp4_grass2_1"
    FLUFFED_JINCAO_POWDER = "item_plant_grass_spc_powder_1"
    THORNY_YAZHEN_POWDER = "item_plant_grass_spc_powder_2"
    FIREBUCKLE_POWDER = "item_plant_moss_spc_powder_1"
    CITROMIX = "item_plant_moss_spc_powder_2"
    COSMO_MELTO_JELLY = "item_agfly_1_agmelee_1_moss_2_1"
    MEATY_BUCKFLOWER_STEW = "item_agmelee_1_moss_1_lbmob_1_1"
    SUPERHOT_SLUG_GRATIN = "item_agmelee_1_sp_2_slimeml_1_1"
    JAKUBS_LEGACY = "item_agrange_1_erhound_1_sp_1_1"
    SIMPLE_PAIN_RELIEF_SALVE = "item_agrange_1_lbshamman_bottled_1"
    HANDMADE_WEIRDROP = "item_agrange_1_moss_2_lbmob_1_1"
    KUNST_VIAL = "item_bottled_insec2_1"
    KUNST_TUBE = "item_bottled_insec2_2"
    PERPLEXING_MEDICATION = "item_bottled_moss_1_2_1"
    GINSENG_MEAT_STEW = "item_corp3_animal_1"
    FORTIFYING_INFUSION = "item_corp3_grass1_1"
    WULING_FRIED_RICE = "item_corp4_animal_1"
    STEW_MEETING = "item_dog_1_slimeml_1_1"
    HAZEFYRE_BLOSSOM = "item_erhound_1_agmelee_1_moss_1_1"
    EDIBLE_DENSTACK = "item_firebat_1_agrange_1_1"
    SIMMERED_XIRANITE_BALL = "item_hsfly_1_slimeml_1_hsmob_1_1"
    WULING_FLAME_BOYANCE = "item_hshog_1_hsmob_1_slimeml_1_1"
    SESQA_STYLE_FILLET = "item_lbmob_1_dog_1_moss_1_1"
    CARTILAGE_TACK = "item_lbmob_1_lbshamman_1_sp_1_1"
    SECRET_STIMULATING_TISANE = "item_lbmob_1_moss_2_bottled_1"
    INSTANT_BONE_SOUP = "item_lbshamman_1_agmelee_1_1"
    OLD_MAN_JOHNS_BURGER = "item_lbshield_1_slimeml_1_dog_1_1"
    SOD_TURNING_MEAT_SOUP = "item_mimicw_1_moss_1_moss_2_1"
    MINI_HONEY_SLUGPUDDING = "item_slimeml_1_agrange_1_moss_2_1"
    PULLED_SLUG_MEAT = "item_slimeml_1_erhound_1_agfly_1_1"
    HUB_EMERGENCY_RATION = "item_sp_1_moss_1_agmelee_1_1"
    SUPERHOT_FRUIT_PRESERVES = "item_sp_2_moss_2_agrange_1_1"
    MINI_SUGAR_PAINTING = "item_wgshoal_1_grass_1_grass_2_1"
    CHUBBY_LUNG_JELLIED_GREENS = "item_wgslime_1_hsmob_1_grass_2_1"
    MYSTERY_SODA = "item_wgslime_1_wgthorns_1_1"
    PAN_FRIED_DOUBLE_CRISP = "item_wgthorns_1_hshog_1_hsmob_1_1"
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


class Item(NamedTuple):
    """Static properties of an item."""
    id: str
    fluid: bool = False


FLUID_ITEMS = frozenset({
    ItemID.JINCAO_SOLUTION,
    ItemID.YAZHEN_SOLUTION,
    ItemID.CLEAN_WATER,
    ItemID.LIQUID_XIRANITE,
})


ITEMS: Dict[str, Item] = {
    item.value: Item(item.value, item in FLUID_ITEMS) for item in ItemID
}


def is_fluid(item_id: str) -> bool:
    """True if the item can only be carried by pipes."""
    item = ITEMS.get(item_id)
    return item is not None and item.fluid

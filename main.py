#!/usr/bin/env python3
"""
Endfield Factory Planner - Main Entry Point

Recalculates factory fields from saved change lists and lists the game data
the engine knows about.
"""

import argparse
import json
import logging
import sys


def _print_summary(state):
    """Print a short report of a computed field."""
    debug = state.debug_info
    print(f"Field: {state.width}x{state.height}")
    print(f"Facilities: {len(state.facilities)}")
    print(f"Paths: {len(state.paths)}")
    print(f"Fixtures: {len(state.path_fixtures)}")
    status = "converged" if debug.flow_solver_converged else "did not converge"
    print(f"Solver: {status} after {debug.flow_solver_iterations} iterations")
    print(f"Power: {state.depot.power_generated:g} generated, {state.depot.power_consumed:g} consumed")

    for flow in state.depot.output_flows:
        print(f"  depot receives {flow.item}: {flow.sink_rate:.3f}/s")
    for flow in state.depot.input_flows:
        print(f"  depot supplies {flow.item}: {flow.sink_rate:.3f}/s")

    for facility in state.facilities:
        if facility.error_flags:
            print(f"  {facility.id} ({facility.type.value}): {', '.join(sorted(facility.error_flags))}")
    for path in state.paths:
        if path.error_flags:
            print(f"  {path.id}: {', '.join(sorted(path.error_flags))}")
    for warning in debug.multiple_recipe_match_warnings:
        print(f"  {warning.facility_id} matches several recipes: {', '.join(warning.matching_recipes)}")
    for rejected in debug.rejected_changes:
        print(f"  change {rejected.index} ({rejected.change_type}) rejected: {rejected.reason}")


def _write_state(state, output):
    from factory_planner.storage.export import field_state_to_dict

    with open(output, "w", encoding="utf-8") as f:
        json.dump(field_state_to_dict(state), f, indent=2)
    print(f"Wrote field state to {output}")


def _solver_config(args):
    from factory_planner.config import SolverConfig

    return SolverConfig(max_iterations=args.max_iterations, epsilon=args.epsilon)


def run_recalc(args):
    """Recalculate a saved project or change list."""
    from factory_planner.field.pipeline import recalculate
    from factory_planner.storage.envelopes import (
        PROJECT_TYPE,
        deserialize_changes,
        project_from_dict,
    )

    try:
        with open(args.file, encoding="utf-8") as f:
            text = f.read()
        data = json.loads(text)
        if isinstance(data, dict) and data.get("type") == PROJECT_TYPE:
            project = project_from_dict(data)
            template, changes = project.template, project.changes
            print(f"Project: {project.meta.name}")
        else:
            template, changes = args.template, deserialize_changes(text)
        state = recalculate(template, changes, config=_solver_config(args), strict=args.strict)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    _print_summary(state)
    if args.output:
        _write_state(state, args.output)
    return 0 if state.debug_info.flow_solver_converged else 2


def run_sample(args):
    """Recalculate the built-in sample field."""
    from factory_planner.field.pipeline import recalculate
    from factory_planner.field.samples import SAMPLE_TEMPLATE, get_sample_field_changes

    state = recalculate(SAMPLE_TEMPLATE, get_sample_field_changes(), config=_solver_config(args))
    _print_summary(state)
    if args.output:
        _write_state(state, args.output)
    return 0 if state.debug_info.flow_solver_converged else 2


def run_templates():
    """List field templates."""
    from factory_planner.catalog.templates import FIELD_TEMPLATES

    print("Available field templates:")
    print()
    for template_id, template in FIELD_TEMPLATES.items():
        bus = template.depot_bus_layout.arrangement if template.depot_bus_layout else "none"
        print(f"  {template_id.value:18s} - {template.width}x{template.height}, "
              f"{template.region.value}, depot bus: {bus}")
    return 0


def run_recipes(args):
    """List recipes, optionally for one facility type."""
    from factory_planner.catalog.recipes import RECIPES

    recipes = [r for r in RECIPES.values()
               if args.facility is None or r.facility_id.value == args.facility]
    if not recipes:
        print(f"No recipes for facility '{args.facility}'")
        return 1
    for recipe in recipes:
        inputs = ", ".join(f"{n}x {item.value}" for item, n in recipe.inputs.items())
        outputs = ", ".join(f"{n}x {item.value}" for item, n in recipe.outputs.items())
        if recipe.power_output:
            outputs = f"{recipe.power_output:g} power"
        print(f"  {recipe.id:36s} {recipe.facility_id.value:24s} {recipe.time:g}s  {inputs} -> {outputs}")
    return 0


def main():
    """Main entry point."""
    from factory_planner.catalog.regions import FieldTemplateID
    from factory_planner.config import CONVERGENCE_EPSILON, MAX_SOLVER_ITERATIONS

    parser = argparse.ArgumentParser(
        description="Endfield Factory Planner - Recalculate factory fields from change lists"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    solver_options = argparse.ArgumentParser(add_help=False)
    solver_options.add_argument(
        "--max-iterations",
        type=int,
        default=MAX_SOLVER_ITERATIONS,
        help=f"Flow solver iteration cap (default: {MAX_SOLVER_ITERATIONS})"
    )
    solver_options.add_argument(
        "--epsilon",
        type=float,
        default=CONVERGENCE_EPSILON,
        help=f"Convergence tolerance in items/s (default: {CONVERGENCE_EPSILON})"
    )
    solver_options.add_argument("-o", "--output", help="Write the computed field state as JSON")

    # Recalc command
    recalc_parser = subparsers.add_parser(
        "recalc", parents=[solver_options], help="Recalculate a project or change list file")
    recalc_parser.add_argument("file", help="Project or change list JSON file")
    recalc_parser.add_argument(
        "-t", "--template",
        default=FieldTemplateID.WULING_MAIN.value,
        choices=[t.value for t in FieldTemplateID],
        help="Template for bare change lists (default: wuling_main)"
    )
    recalc_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first invalid change instead of skipping it"
    )

    # Sample command
    subparsers.add_parser("sample", parents=[solver_options], help="Recalculate the sample field")

    # Listing commands
    subparsers.add_parser("templates", help="List field templates")
    recipes_parser = subparsers.add_parser("recipes", help="List recipes")
    recipes_parser.add_argument("-f", "--facility", help="Only recipes for this facility type")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "recalc":
        return run_recalc(args)
    elif args.command == "sample":
        return run_sample(args)
    elif args.command == "templates":
        return run_templates()
    elif args.command == "recipes":
        return run_recipes(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

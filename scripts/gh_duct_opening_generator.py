# File: scripts/gh_duct_opening_generator.py
"""Duct Opening Generator for Grasshopper (Rhino.Inside.Revit).

Places a rectangular opening in every architectural wall crossed by a duct
of the linked mechanical model.

Key Features:
1. Setup Checks
   - Finds the mechanical model among open documents by title marker
   - Verifies the opening family is loaded
   - Finds a non-template 3D view for ray casting

2. Crossing Detection
   - Casts every duct centerline against the walls of the active document
   - Keeps one crossing per wall, only within the duct length

3. Opening Placement
   - Activates the opening type in its own transaction
   - Places openings duct by duct, one transaction per duct
   - Sizes each opening to the duct diameter

Environment:
    Rhino 8
    Grasshopper
    Rhino.Inside.Revit
    Python component (CPython 3)

Input Requirements:
    config_path (config) - str:
        Optional JSON file with OpeningConfig overrides
        Required: No
        Access: Item

    run (run) - bool:
        Execute toggle
        Required: Yes
        Access: Item

Outputs:
    report_json (json) - str:
        Run report (placed openings, skipped ducts and crossings)

    opening_ids (ids) - list of int:
        Element ids of the created openings

    debug_info (info) - str:
        Processing summary and diagnostics

Version: 1.0.0
"""

# =============================================================================
# Imports
# =============================================================================

# Standard library
import os
import sys
import traceback

# .NET / CLR
import clr
clr.AddReference("Grasshopper")
clr.AddReference("RevitAPI")

import Grasshopper
from RhinoInside.Revit import Revit

# =============================================================================
# Constants
# =============================================================================

COMPONENT_NAME = "Duct Opening Generator"
COMPONENT_NICKNAME = "DuctOpen"
COMPONENT_MESSAGE = "v1.0"

# Project path (folder containing src/)
PROJECT_PATH = os.environ.get("WALL_OPENING_GENERATOR_PATH", "")
if PROJECT_PATH:
    src_path = os.path.join(PROJECT_PATH, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)

# =============================================================================
# Project Imports
# =============================================================================

try:
    from wall_opening_generator.config import load_opening_config
    from wall_opening_generator.core import SetupError
    from wall_opening_generator.generator import OpeningGenerator
    from wall_opening_generator.revit import (
        find_secondary_document,
        find_opening_family_symbol,
        find_3d_view,
        collect_ducts,
        RevitWallSupplier,
        ReferenceIntersectorRayCaster,
        RevitLevelResolver,
        RevitOpeningCreator,
        make_transaction_factory,
        activate_family_symbol,
        element_id_value,
    )
    from wall_opening_generator.utils.logging_config import OpeningGeneratorLogger
    PROJECT_AVAILABLE = True
    PROJECT_ERROR = None
except ImportError as e:
    PROJECT_AVAILABLE = False
    PROJECT_ERROR = str(e)

# =============================================================================
# Logging Utilities
# =============================================================================

def log_message(message, level="info"):
    """Log to console and optionally add GH runtime message."""
    print(f"[{level.upper()}] {message}")
    if level == "warning":
        ghenv.Component.AddRuntimeMessage(
            Grasshopper.Kernel.GH_RuntimeMessageLevel.Warning, message)
    elif level == "error":
        ghenv.Component.AddRuntimeMessage(
            Grasshopper.Kernel.GH_RuntimeMessageLevel.Error, message)


def setup_component():
    """Initialize and configure the Grasshopper component."""
    ghenv.Component.Name = COMPONENT_NAME
    ghenv.Component.NickName = COMPONENT_NICKNAME
    ghenv.Component.Message = COMPONENT_MESSAGE


def validate_inputs():
    """Validate component inputs."""
    if not PROJECT_AVAILABLE:
        return False, f"Project import error: {PROJECT_ERROR}"

    if not run:
        return False, "Toggle 'run' to True to execute"

    return True, None

# =============================================================================
# Main Function
# =============================================================================

def main():
    """Main entry point for the component."""
    setup_component()

    report_json = "{}"
    opening_ids = []
    debug_lines = ["=" * 50, "DUCT OPENING GENERATOR", "=" * 50]

    try:
        is_valid, error_msg = validate_inputs()
        if not is_valid:
            debug_lines.append(error_msg)
            return report_json, opening_ids, "\n".join(debug_lines)

        config = load_opening_config(config_path or None)
        log_file = OpeningGeneratorLogger.configure(
            debug_mode=config.debug, log_dir=config.log_dir, trace=config.trace
        )
        debug_lines.append(f"Log file: {log_file}")

        doc = Revit.ActiveDBDocument
        if doc is None:
            debug_lines.append("ERROR: No active Revit document")
            return report_json, opening_ids, "\n".join(debug_lines)

        # Setup checks (nothing is modified if any of them fails)
        try:
            mech_doc = find_secondary_document(doc.Application, config.secondary_document_marker)
            symbol = find_opening_family_symbol(doc, config.family_name, config.family_category)
            view3d = find_3d_view(doc)
        except SetupError as e:
            log_message(e.message, "error")
            debug_lines.append(f"ERROR: {e.message}")
            return report_json, opening_ids, "\n".join(debug_lines)

        debug_lines.append(f"Architectural model: {doc.Title}")
        debug_lines.append(f"Mechanical model: {mech_doc.Title}")

        ducts = collect_ducts(mech_doc)
        candidates = RevitWallSupplier(doc).get_candidates()
        debug_lines.append(f"Ducts: {len(ducts)}")
        debug_lines.append(f"Walls: {len(candidates)}")

        activate_family_symbol(doc, symbol, config.activation_transaction_name)

        generator = OpeningGenerator(
            ReferenceIntersectorRayCaster(view3d),
            RevitLevelResolver(doc),
            creator=RevitOpeningCreator(doc, config.width_parameter, config.height_parameter),
            transaction_factory=make_transaction_factory(doc),
            config=config,
        )
        report = generator.generate(ducts, candidates, symbol)

        opening_ids = [element_id_value(p.handle.Id) for p in report.placed]
        report_json = report.to_json()

        debug_lines.append("")
        debug_lines.append(report.get_report_info_string())

        skipped = len(report.skipped_ducts) + len(report.skipped_crossings)
        if skipped:
            log_message(f"{skipped} ducts/crossings were skipped; see debug_info", "warning")

    except Exception as e:
        log_message(f"Unexpected error: {str(e)}", "error")
        debug_lines.append(f"ERROR: {str(e)}")
        debug_lines.append(traceback.format_exc())

    return report_json, opening_ids, "\n".join(debug_lines)

# =============================================================================
# Execution
# =============================================================================

if 'run' not in dir():
    run = False
if 'config_path' not in dir():
    config_path = None

report_json, opening_ids, debug_info = main()

#!/usr/bin/env python3
"""
menuwalk - Navigation menu rendering engine

Renders a menu tree from a YAML/JSON menu document into accessible HTML
markup using one of the registered menu variants (dropdown, desktop,
mobile accordion, mega menu, overlay, ...).

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Usage:
    menuwalk inputdir/ outputdir/ --inputFile menus.yaml --variant mobile

    The rendered markup is written to outputdir/ as a fragment ready to
    drop into a page that loads Alpine.js.

Examples:
    # Render the primary location as a dropdown menu
    menuwalk . output/ --inputFile menus.yaml

    # Mega menu for the footer location
    menuwalk . output/ --inputFile menus.yaml --variant mega-menu --location footer

    # Strict URL checking, verbose output
    menuwalk . output/ --inputFile menus.yaml --strict -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import MenuRenderer, MenuDocument, DocumentError, VariantNotFoundError, __version__, LOG, state_connectToLogger
from .lib.document import documents_listAvailable
from .lib.security import urlCache_clear
from .models import ProgramState, pipeline, OptionsError


DISPLAY_TITLE = r"""
  _ __ ___   ___ _ __  _   ___      ____ _| | | __
 | '_ ` _ \ / _ \ '_ \| | | \ \ /\ / / _` | | |/ /
 | | | | | |  __/ | | | |_| |\ V  V / (_| | |   <
 |_| |_| |_|\___|_| |_|\__,_| \_/\_/ \__,_|_|_|\_\

  Navigation menu rendering engine
"""

parser = ArgumentParser(
    description="menuwalk - Render navigation menus from a menu document",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile",
    default="",
    type=str,
    help="Menu document (.yaml/.yml/.json) relative to inputdir. Defaults to the first one found",
)

parser.add_argument(
    "--variant",
    default=appsettings.default_variant,
    type=str,
    help="Menu variant to render with",
)

parser.add_argument("--location", default="primary", type=str, help="Menu location inside the document")

parser.add_argument("--outputFile", default="menu.html", type=str, help="Output filename (relative to outputdir)")

parser.add_argument("--strict", action="store_true", default=False, help="Enable strict URL checking")

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputMenuFile: Resolved path to the menu document
            - htmlOutputFile: Path the markup will be written to
            - envOK: True if environment is valid

    Exits:
        1 if no menu document can be found
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    inputFile = state.inputFile
    if not inputFile:
        available = documents_listAvailable(state.inputdir)
        if not available:
            print(f"Error: No menu document found in {state.inputdir}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        inputFile = available[0]
        LOG(f"No --inputFile given; using {inputFile}", level=1)

    input_file = state.inputdir / inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputMenuFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.htmlOutputFile = state.outputdir / state.outputFile
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    if state.strict:
        appsettings.strict_mode = True
        urlCache_clear()
        LOG("Strict URL checking enabled", level=2)

    state.envOK = True
    return state


def document_load(inputstate: ProgramState) -> ProgramState:
    """
    Load and validate the menu document.

    Returns:
        ProgramState with added field:
            - menuDocument: MenuDocument

    Exits:
        1 if the document cannot be parsed or fails validation
    """
    state = inputstate.copy()

    LOG("Loading menu document...", level=1)
    try:
        state.menuDocument = MenuDocument(state.inputMenuFile)
    except DocumentError as e:
        print(f"Document error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Locations: {', '.join(state.menuDocument.locations_list()) or '(none)'}", level=2)
    return state


def menu_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the requested location with the requested variant and write it out.

    Returns:
        ProgramState with added field:
            - renderResult: RenderResult

    Exits:
        1 on unknown variant, invalid options or a write failure
    """
    state = inputstate.copy()

    if state.menuDocument is None:
        print("Error: No menu document loaded", file=sys.stderr)
        sys.exit(1)

    if not state.menuDocument.location_has(state.location):
        LOG(f"Location '{state.location}' is not defined in {state.inputMenuFile.name}", level=1)

    LOG(f"Rendering '{state.location}' as '{state.variant}'...", level=1)
    options, extra_options = state.menuDocument.variantOptions_get(state.variant)
    renderer = MenuRenderer(trees=state.menuDocument.trees_get(), verbosity=state.verbosity)
    try:
        state.renderResult = renderer.render_detailed(state.variant, state.location, options, extra_options)
    except VariantNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OptionsError as e:
        print(f"Options error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        state.htmlOutputFile.write_text(state.renderResult.html, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display render results to the user.

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Render failed", file=sys.stderr)
        sys.exit(1)

    stats = state.renderResult.stats
    if state.verbosity >= 1:
        LOG("\n✓ Render successful!", level=1)
        LOG(f"  Output:   {state.htmlOutputFile}", level=1)
        LOG(f"  Variant:  {state.renderResult.request.variant}", level=1)
        LOG(f"  Items:    {stats.get('items_processed', 0)} rendered, {stats.get('items_rejected', 0)} rejected", level=1)
        if not state.renderResult.html:
            LOG(f"  Note: location '{state.location}' produced no markup", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="menuwalk - Navigation menu rendering engine",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render one menu location from a menu document.

    Orchestrates the pipeline:
        1. env_check: Resolve the document and output paths
        2. document_load: Parse and validate the menu document
        3. menu_render: Render the location and write the markup
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, document_load, menu_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature

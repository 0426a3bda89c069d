#!/usr/bin/env python3
"""
webflow - markup to HTML compiler

Compiles a .webf source file, and every component it imports, into a single
HTML fragment.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Indentation-free: elements close with ';', not with whitespace
    - Typed attribute blocks: props{}, dataset{}, classes{}, ids{}, styles{}, content{}
    - Components: import Name from "file.webf"; then use Name:; as a tag
    - Fail fast: the first error aborts the compile, nothing is written

Usage:
    webflow inputdir/ outputdir/ --inputFile index.webf

    The compiled fragment is written to outputdir/ as index.html.

Examples:
    # Basic compilation
    webflow . output/ --inputFile index.webf

    # Explicit output name and verbose output
    webflow . output/ --inputFile index.webf --outputFile home.html -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Compiler, WebflowError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="webflow - compile .webf element markup to HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input webflow (.webf) file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help="Output HTML filename within outputdir. Defaults to the input name with .html suffix",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def error_report(error: WebflowError) -> None:
    """Print a compilation error to stderr"""
    print(f"{error.headline}: {error.message}", file=sys.stderr)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Verifies that the input file exists, then creates the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to .webf input file
            - htmlOutputFile: Path the compiled HTML will be written to
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """

    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = Path(state.inputdir or ".") / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    output_name = state.outputFile or appsettings.outputName_make(state.inputFile)
    output_dir = Path(state.outputdir or ".")
    output_dir.mkdir(parents=True, exist_ok=True)
    state.htmlOutputFile = output_dir / output_name
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the webflow source file.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added field:
            - sourceText: Raw contents of the input file

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding=appsettings.encoding)
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def html_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile the source text, resolving imports against the input file's directory.

    Args:
        inputstate: Program state with sourceText

    Returns:
        ProgramState with added fields:
            - compiledHTML: Compiled HTML fragment
            - componentCount: Number of components resolved

    Exits:
        1 on any compilation error
    """

    state = inputstate.copy()

    LOG("Compiling source to HTML...", level=1)

    source_path = str(state.inputSourceFile.resolve())
    components: dict[str, str] = {}
    compiler = Compiler(
        base_dir=str(state.inputSourceFile.resolve().parent),
        components=components,
        resolving=[source_path],
    )

    try:
        state.compiledHTML = compiler.compile(state.sourceText or "")
    except WebflowError as e:
        error_report(e)
        sys.exit(1)

    state.componentCount = len(components)
    LOG(f"Compilation complete: {state.componentCount} components resolved", level=2)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the compiled HTML verbatim to the output file.

    Exits:
        1 if nothing was compiled or the file cannot be written
    """

    state = inputstate.copy()

    if state.compiledHTML is None:
        print("Error: No compiled HTML available", file=sys.stderr)
        sys.exit(1)

    try:
        state.htmlOutputFile.write_text(state.compiledHTML, encoding=appsettings.encoding)
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.htmlOutputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    LOG("\n✓ Compilation successful!", level=1)
    LOG(f"  Output: {state.htmlOutputFile}", level=1)
    LOG(f"  Components: {state.componentCount}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="webflow - markup to HTML compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile a .webf source to HTML.

    Orchestrates the full compilation pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read the .webf file
        3. html_compile: Compile source and imports to HTML
        4. output_write: Write the .html file
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, html_compile, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature

"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from argparse import Namespace
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Callable, Optional, Type, TypeVar


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile
        - env_check: inputSourceFile, htmlOutputFile, envOK
        - source_read: sourceText
        - html_compile: compiledHTML, componentCount
        - output_write: (writes htmlOutputFile)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source .webf file
        outputdir: Directory where the compiled .html file is written
        verbosity: Logging verbosity level (1-3)
        inputFile: Input .webf filename (relative to inputdir)
        outputFile: Output filename; derived from inputFile when empty
        envOK: Environment validation passed
        inputSourceFile: Resolved path to input .webf file
        htmlOutputFile: Resolved path of the .html output file
        sourceText: Raw text of the input file
        compiledHTML: Compiled HTML fragment
        componentCount: Number of components resolved during compilation
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: str = field(default="")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputFile: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    compiledHTML: Optional[str] = field(default=None)
    componentCount: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, verbosity)
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            html_compile,
            output_write,
            results_report
        )

    This is equivalent to:
        results_report(output_write(html_compile(source_read(env_check(initial_state)))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)

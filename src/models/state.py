"""
Program state model and pipeline helper

Defines the ProgramState dataclass carried through the CLI pipeline and the
pipeline() helper for composing its stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

if TYPE_CHECKING:
    from ..lib.document import MenuDocument
    from .variants import RenderResult


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the render pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, variant, location,
          outputFile, strict
        - env_check: inputMenuFile, htmlOutputFile, envOK
        - document_load: menuDocument
        - menu_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the menu document
        outputdir: Directory the rendered markup is written to
        verbosity: Logging verbosity level (1-3)
        inputFile: Menu document filename (relative to inputdir); empty
            picks the first document found
        variant: Variant key to render with
        location: Menu location inside the document
        outputFile: Output filename (relative to outputdir)
        strict: Force strict URL checking for this run
        envOK: Environment validation passed
        inputMenuFile: Resolved path to the menu document
        htmlOutputFile: Resolved path to the output file
        menuDocument: Loaded MenuDocument
        renderResult: RenderResult from the renderer
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    variant: str = field(default="dropdown")
    location: str = field(default="primary")
    outputFile: str = field(default="menu.html")
    strict: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputMenuFile: Path = field(default=Path("/"))
    htmlOutputFile: Path = field(default=Path("/"))
    menuDocument: Optional["MenuDocument"] = field(default=None)
    renderResult: Optional["RenderResult"] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, variant, location, ...)
            inputdir: Directory containing the menu document
            outputdir: Directory for the rendered markup

        Returns:
            ProgramState instance with all known CLI options as attributes
        """
        import dataclasses

        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """Shallow copy of this state"""
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(initial_state, env_check, document_load, menu_render, results_report)

    is equivalent to:
        results_report(menu_render(document_load(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)

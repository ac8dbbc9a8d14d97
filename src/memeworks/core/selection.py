"""Selection state and the controller that keeps the output URL in sync.

The three user inputs (template, top text, bottom text) live in a single
frozen :class:`SelectionState`. Every change goes through :func:`reduce`,
which builds the next state from the complete previous one, and the
controller re-derives the output URL from that new state before the mutator
returns. Synthesis therefore never sees a field value older than the update
that triggered it.

Usage Example
-------------
    controller = SelectionController(config)
    controller.set_top_text("X")
    controller.set_selected_template("doge")
    controller.output_url  # contains both "X" and "doge"
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Union

from .catalog import TemplateCatalog, TemplateDescriptor
from .synthesizer import SynthesisResult, UrlSynthesizer, is_external_ref

if TYPE_CHECKING:
    from .config import MemeworksConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionState:
    """The user's current choices.

    Attributes:
        selected_template_id: Template key or image URL, None for no template
        top_text: Raw top line as typed
        bottom_text: Raw bottom line as typed
    """

    selected_template_id: str | None = None
    top_text: str = ""
    bottom_text: str = ""


@dataclass(frozen=True)
class SetTemplate:
    template_id: str | None


@dataclass(frozen=True)
class SetTopText:
    text: str


@dataclass(frozen=True)
class SetBottomText:
    text: str


Action = Union[SetTemplate, SetTopText, SetBottomText]

OutputListener = Callable[[str], None]


def initial_state(template_id: str | None = None) -> SelectionState:
    """Create the session start state: optional template, empty text."""
    return SelectionState(selected_template_id=_clean_template_id(template_id))


def _clean_template_id(template_id: str | None) -> str | None:
    # "" is how the UI says "no template"
    if template_id is None:
        return None
    stripped = template_id.strip()
    return stripped or None


def reduce(state: SelectionState, action: Action) -> SelectionState:
    """Compute the next state from the previous state and one action.

    Args:
        state: Previous state
        action: Change to apply

    Returns:
        New SelectionState; the previous state is left untouched

    Raises:
        TypeError: If the action type is unknown
    """
    if isinstance(action, SetTemplate):
        return replace(state, selected_template_id=_clean_template_id(action.template_id))
    if isinstance(action, SetTopText):
        return replace(state, top_text=action.text or "")
    if isinstance(action, SetBottomText):
        return replace(state, bottom_text=action.text or "")
    raise TypeError(f"Unknown selection action: {action!r}")


def resolve_template_ref(state: SelectionState, catalog: TemplateCatalog) -> str | None:
    """Cross-reference the selected template against the catalog.

    A known id resolves to the catalog's canonical id. Unknown ids, external
    URLs and selections made while the catalog is empty pass through as raw
    values for the synthesizer to interpret.
    """
    selected = state.selected_template_id
    if selected is None or is_external_ref(selected):
        return selected
    descriptor = catalog.get(selected)
    if descriptor is not None:
        return descriptor.id
    if catalog:
        logger.debug(f"Template '{selected}' not in catalog, using raw value")
    return selected


class SelectionController:
    """Owns the selection state and its derived output URL.

    Args:
        config: Configuration used to build the default synthesizer
        catalog: Loaded catalog (empty until the fetch completes)
        synthesizer: Optional pre-built synthesizer
        state: Optional starting state (defaults to config.initial_template)
    """

    def __init__(
        self,
        config: MemeworksConfig,
        catalog: TemplateCatalog | None = None,
        synthesizer: UrlSynthesizer | None = None,
        state: SelectionState | None = None,
    ):
        self._synthesizer = synthesizer or UrlSynthesizer(config)
        self._catalog = catalog if catalog is not None else TemplateCatalog()
        self._state = state if state is not None else initial_state(config.initial_template)
        self._listeners: list[OutputListener] = []
        self._synthesis = self._derive()

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def catalog(self) -> TemplateCatalog:
        return self._catalog

    @property
    def synthesis(self) -> SynthesisResult:
        return self._synthesis

    @property
    def output_url(self) -> str:
        return self._synthesis.url

    @property
    def selected_template(self) -> TemplateDescriptor | None:
        return self._catalog.get(self._state.selected_template_id)

    def dispatch(self, action: Action) -> str:
        """Apply an action and re-derive the output URL.

        Returns:
            The output URL computed from the new state
        """
        self._state = reduce(self._state, action)
        self._refresh()
        return self.output_url

    def set_selected_template(self, template_id: str | None) -> str:
        return self.dispatch(SetTemplate(template_id))

    def set_top_text(self, text: str) -> str:
        return self.dispatch(SetTopText(text))

    def set_bottom_text(self, text: str) -> str:
        return self.dispatch(SetBottomText(text))

    def attach_catalog(self, catalog: TemplateCatalog) -> str:
        """Install a freshly loaded catalog and re-derive the output URL."""
        self._catalog = catalog
        self._refresh()
        return self.output_url

    def subscribe(self, listener: OutputListener) -> Callable[[], None]:
        """Register a callback for output URL changes.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _derive(self) -> SynthesisResult:
        ref = resolve_template_ref(self._state, self._catalog)
        return self._synthesizer.resolve(ref, self._state.top_text, self._state.bottom_text)

    def _refresh(self) -> None:
        previous = self._synthesis.url
        self._synthesis = self._derive()
        if self._synthesis.url != previous:
            for listener in list(self._listeners):
                listener(self._synthesis.url)

    def __repr__(self) -> str:
        return (
            f"SelectionController(template={self._state.selected_template_id!r}, "
            f"catalog={len(self._catalog)}, mode={self._synthesis.mode.value})"
        )

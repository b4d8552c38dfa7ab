"""Enabled/disabled flags and placeholder text derived from AppState.

The Tk widgets only copy these values onto controls, so the rules for when a
control is usable are testable without a display.
"""
from dataclasses import dataclass

from services.state import AppState, FORM_OPTION_KIND
from utils.constants import SERVICE

# (loading, empty, failed) selector text per form
_PLACEHOLDERS = {
    SERVICE: (
        "Loading types...",
        "No types defined (check Configuration tab)",
        "Could not load types",
    ),
}
_DEFAULT_PLACEHOLDERS = (
    "Loading categories...",
    "No categories defined (check Configuration tab)",
    "Could not load categories",
)


@dataclass(frozen=True)
class FormControls:
    selector_values: list[str]
    selector_value: str
    selector_enabled: bool
    submit_enabled: bool
    inputs_enabled: bool = True


@dataclass(frozen=True)
class ListManagerControls:
    add_enabled: bool
    delete_enabled: bool
    show_empty_notice: bool
    error_text: str = ""


def form_controls(state: AppState, form: str) -> FormControls:
    options = state.options(FORM_OPTION_KIND[form])
    names = options.names
    if names:
        draft = state.draft(form)
        value = getattr(draft, draft.SELECTOR)
    else:
        loading_text, empty_text, failed_text = _PLACEHOLDERS.get(form, _DEFAULT_PLACEHOLDERS)
        if options.is_loading:
            value = loading_text
        elif options.error:
            value = failed_text
        else:
            value = empty_text
    return FormControls(
        selector_values=names,
        selector_value=value,
        selector_enabled=bool(names),
        submit_enabled=state.connected and bool(names),
        inputs_enabled=state.connected,
    )


def list_manager_controls(state: AppState, kind: str) -> ListManagerControls:
    options = state.options(kind)
    return ListManagerControls(
        add_enabled=state.connected and not options.is_loading,
        delete_enabled=state.connected,
        show_empty_notice=not options.options and not options.is_loading and not options.error,
        error_text=f"Error loading list: {options.error}" if options.error else "",
    )

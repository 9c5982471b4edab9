"""Ready-made macros for common host workflows.

Each ``*_macro`` function returns a populated builder; the matching action
function runs it. Dialog, field and button names are host identifiers.
"""
from typing import Callable, Dict

from .builder import MacroBuilder
from .models import RunResult
from .runner import MacroRunner
from .utils import DEFAULT_FRAME


def numbering_macro(number_all_modified: bool) -> MacroBuilder:
    callback = "acmd_partnumbers_all" if number_all_modified else "acmd_partnumbers_selected"
    return MacroBuilder().callback(callback, "", DEFAULT_FRAME)


def numbering_settings_macro() -> MacroBuilder:
    return MacroBuilder().callback("acmd_display_partnumbers_set_options", "", DEFAULT_FRAME)


def drawing_list_macro() -> MacroBuilder:
    return MacroBuilder().callback("gdr_menu_select_active_draw", "", DEFAULT_FRAME)


def _drawing_properties_macro(prefix: str, name: str) -> MacroBuilder:
    dialog = f"{prefix}_dial"
    return (MacroBuilder()
            .callback("acmd_display_attr_dialog", dialog, DEFAULT_FRAME)
            .value_change(dialog, f"gr_{prefix}_get_menu", name)
            .push_button(f"gr_{prefix}_get", dialog))


def single_part_drawing_properties_macro(name: str) -> MacroBuilder:
    return _drawing_properties_macro("wdraw", name)


def assembly_drawing_properties_macro(name: str) -> MacroBuilder:
    return _drawing_properties_macro("adraw", name)


def cast_unit_drawing_properties_macro(name: str) -> MacroBuilder:
    return _drawing_properties_macro("cudraw", name)


def general_arrangement_drawing_properties_macro(name: str) -> MacroBuilder:
    return _drawing_properties_macro("gdraw", name)


def auto_drawing_script_macro(name: str) -> MacroBuilder:
    return (MacroBuilder()
            .callback("acmd_create_drawings_auto", "", DEFAULT_FRAME)
            .list_select("dia_auto_drawings", "auto_drawings_list", name)
            .push_button("Pushbutton_133", "dia_auto_drawings"))


def ga_drawing_from_template_macro(name: str) -> MacroBuilder:
    return (MacroBuilder()
            .callback("acmd_create_dim_general_assembly_drawing", "", DEFAULT_FRAME)
            .push_button("Pushbutton", "Create GA-drawing")
            .value_change("gdraw_dial", "gr_gdraw_get_menu", name)
            .push_button("gr_gdraw_get", "gdraw_dial")
            .push_button("gr_gdraw_ok", "gdraw_dial"))


def perform_numbering(runner: MacroRunner, number_all_modified: bool) -> RunResult:
    """Number all modified parts, or only the selected modified parts."""
    return numbering_macro(number_all_modified).run(runner)


def open_numbering_settings(runner: MacroRunner) -> RunResult:
    return numbering_settings_macro().run(runner)


def open_drawing_list(runner: MacroRunner) -> RunResult:
    return drawing_list_macro().run(runner)


def open_single_part_drawing_properties(runner: MacroRunner, name: str) -> RunResult:
    return single_part_drawing_properties_macro(name).run(runner)


def open_assembly_drawing_properties(runner: MacroRunner, name: str) -> RunResult:
    return assembly_drawing_properties_macro(name).run(runner)


def open_cast_unit_drawing_properties(runner: MacroRunner, name: str) -> RunResult:
    return cast_unit_drawing_properties_macro(name).run(runner)


def open_general_arrangement_drawing_properties(runner: MacroRunner, name: str) -> RunResult:
    return general_arrangement_drawing_properties_macro(name).run(runner)


def open_auto_drawing_script(runner: MacroRunner, name: str) -> RunResult:
    return auto_drawing_script_macro(name).run(runner)


def create_ga_drawing_from_template(runner: MacroRunner, name: str) -> RunResult:
    return ga_drawing_from_template_macro(name).run(runner)


# CLI task name -> builder factory
TASKS: Dict[str, Callable[..., MacroBuilder]] = {
    "numbering-all": lambda: numbering_macro(True),
    "numbering-selected": lambda: numbering_macro(False),
    "numbering-settings": numbering_settings_macro,
    "drawing-list": drawing_list_macro,
    "single-part-drawing-properties": single_part_drawing_properties_macro,
    "assembly-drawing-properties": assembly_drawing_properties_macro,
    "cast-unit-drawing-properties": cast_unit_drawing_properties_macro,
    "ga-drawing-properties": general_arrangement_drawing_properties_macro,
    "auto-drawing-script": auto_drawing_script_macro,
    "ga-drawing-from-template": ga_drawing_from_template_macro,
}

from typing import TYPE_CHECKING, Any, List, Optional

from .models import Command, RunResult
from .utils import DEFAULT_FRAME, SCRIPT_NAMESPACE, wrap_script

if TYPE_CHECKING:
    from .runner import MacroRunner

# Distinguishes the name-only form from an explicit None parameter
_MISSING: Any = object()


class MacroBuilder:
    """
    Fluent recorder of dialog automation commands.

    Every append method returns the builder itself so calls can be chained:

        MacroBuilder().callback("acmd_partnumbers_all").run(runner)

    The recorded text only ever grows; ``run`` may be called more than once
    and re-executes the same text under a fresh file name.
    """

    def __init__(self, script: str = ""):
        self._lines: List[str] = [script] if script else []

    # --- generic calls ---
    def activate(self, dialog: str, field: str) -> "MacroBuilder":
        return self._append_method_call("Activate", dialog, field)

    def callback(self, callback: Optional[str], parameter: Optional[str] = _MISSING,
                 frame: Optional[str] = DEFAULT_FRAME) -> "MacroBuilder":
        """
        Invoke a host callback.

        Called with the name only, the parameter defaults to an empty string
        and the name is required. With an explicit parameter nothing is
        validated.

        Raises:
            ValueError: If only a name is given and it is empty or None
        """
        if parameter is _MISSING:
            if not callback:
                raise ValueError("callback name is required")
            parameter = ""
        return self._append_method_call("Callback", callback, parameter, frame)

    def check_value(self, name: str, value: int) -> "MacroBuilder":
        return self._append_method_call("CheckValue", name, value)

    def command_start(self, command: str, parameter: str, frame: str) -> "MacroBuilder":
        return self._append_method_call("CommandStart", command, parameter, frame)

    def command_end(self) -> "MacroBuilder":
        return self._append_method_call("CommandEnd")

    def modal_dialog(self, value: int) -> "MacroBuilder":
        return self._append_method_call("ModalDialog", value)

    def mouse_down(self, frame: str, subframe: str, x: int, y: int, modifier: int) -> "MacroBuilder":
        return self._append_method_call("MouseDown", frame, subframe, x, y, modifier)

    def mouse_up(self, frame: str, subframe: str, x: int, y: int, modifier: int) -> "MacroBuilder":
        return self._append_method_call("MouseUp", frame, subframe, x, y, modifier)

    def push_button(self, button: str, frame: str) -> "MacroBuilder":
        return self._append_method_call("PushButton", button, frame)

    def tab_change(self, dialog: str, field: str, item: str) -> "MacroBuilder":
        return self._append_method_call("TabChange", dialog, field, item)

    def tree_select(self, dialog: str, field: str, rowstring: str) -> "MacroBuilder":
        return self._append_method_call("TreeSelect", dialog, field, rowstring)

    def value_change(self, dialog: str, field: str, data: str) -> "MacroBuilder":
        return self._append_method_call("ValueChange", dialog, field, data)

    # --- list forms ---
    def file_selection(self, *items: str) -> "MacroBuilder":
        return self._append_list_call("FileSelection", [_quoted(i) for i in items])

    def list_select(self, dialog: str, field: str, *items: str) -> "MacroBuilder":
        rendered = [_quoted(dialog), _quoted(field)]
        rendered.extend(_quoted(i) for i in items)
        return self._append_list_call("ListSelect", rendered)

    def table_select(self, dialog: str, field: str, *items: int) -> "MacroBuilder":
        rendered = [_quoted(dialog), _quoted(field)]
        rendered.extend(str(int(i)) for i in items)
        return self._append_list_call("TableSelect", rendered)

    # --- output ---
    @property
    def text(self) -> str:
        return "".join(self._lines)

    def __str__(self) -> str:
        return self.text

    def to_script(self) -> str:
        """Return the recorded commands wrapped in the host script envelope."""
        return wrap_script(self.text)

    def run(self, runner: "MacroRunner") -> RunResult:
        """
        Write, execute and delete the macro through ``runner``.

        I/O failures are reported through the returned result rather than
        raised.
        """
        return runner.run_script(self.text)

    def _append_method_call(self, method: str, *arguments) -> "MacroBuilder":
        self._lines.append(Command(method, list(arguments)).render())
        return self

    def _append_list_call(self, method: str, rendered: List[str]) -> "MacroBuilder":
        self._lines.append(f"{SCRIPT_NAMESPACE}.{method}({', '.join(rendered)});\n")
        return self


def _quoted(value) -> str:
    # List forms quote every item, numbers included
    return '""' if value is None else f'"{value}"'

"""Editor host contract consumed by the outer ignore controller (pure Python).

The host owns editor views. The controller only asks it which views show a
file, whether a view is a text editor, and to attach or detach a bottom
component. Disposal callbacks registered for a view run once, when that view
is closed for good.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol


class EditorHost(Protocol):
    def editors_for(self, file_path: str) -> Sequence[Any]:
        ...

    def is_text_editor(self, view: Any) -> bool:
        ...

    def add_bottom_component(self, view: Any, component: Any) -> None:
        ...

    def remove_bottom_component(self, view: Any, component: Any) -> None:
        ...

    def register_disposal(self, view: Any, callback: Callable[[], None]) -> None:
        ...

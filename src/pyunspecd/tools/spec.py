"""Tool specification DSL.

A tool is an ``id``, a ``title``, one ``content`` block (one of four variants)
and a ``functions`` mapping of handler name -> callable. Content blocks keep
the camelCase keys the browser client reads; only the parts needed to find
function references are parsed here.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Mapping

from ..errors import ToolValidationError

ToolFunction = Callable[[Any], Any]


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping key or an attribute."""
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _pick(obj: Mapping[str, Any], camel: str, snake: str) -> Any:
    v = obj.get(camel)
    return obj.get(snake) if v is None else v


def _function_name(ref: Any) -> str | None:
    if isinstance(ref, Mapping):
        name = _pick(ref, "functionName", "function_name")
    else:
        name = ref
    if isinstance(name, str) and name.strip():
        return name
    return None


def _require_function(content_type: str, key: str, ref: Any) -> str:
    name = _function_name(ref)
    if name is None:
        raise ToolValidationError(f"{content_type} content requires {key}.functionName")
    return name


def _require_mapping(content_type: str, key: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ToolValidationError(f"{content_type} content requires a {key} object")
    return value


class ToolContent(ABC):
    """Base of the four content variants."""

    TYPE: ClassVar[str] = ""

    raw: Mapping[str, Any]

    @abstractmethod
    def function_names(self) -> list[str]:
        """Names of the ``functions`` entries this content calls."""

    def to_dict(self) -> dict[str, Any]:
        out = dict(self.raw)
        out["type"] = self.TYPE
        return out


@dataclass(frozen=True)
class DisplayRecordContent(ToolContent):
    TYPE: ClassVar[str] = "displayRecord"

    data_loader: str
    display_config: Mapping[str, Any]
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "DisplayRecordContent":
        return cls(
            data_loader=_require_function(cls.TYPE, "dataLoader", _pick(obj, "dataLoader", "data_loader")),
            display_config=_require_mapping(cls.TYPE, "displayConfig", _pick(obj, "displayConfig", "display_config")),
            raw=obj,
        )

    def function_names(self) -> list[str]:
        return [self.data_loader]


@dataclass(frozen=True)
class ActionButtonContent(ToolContent):
    TYPE: ClassVar[str] = "actionButton"

    action: str
    button_config: Mapping[str, Any]
    description: str | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "ActionButtonContent":
        desc = obj.get("description")
        return cls(
            action=_require_function(cls.TYPE, "action", obj.get("action")),
            button_config=_require_mapping(cls.TYPE, "buttonConfig", _pick(obj, "buttonConfig", "button_config")),
            description=desc if isinstance(desc, str) else None,
            raw=obj,
        )

    def function_names(self) -> list[str]:
        return [self.action]


@dataclass(frozen=True)
class EditableTableContent(ToolContent):
    TYPE: ClassVar[str] = "editableTable"

    data_loader: str
    table_config: Mapping[str, Any]
    item_updater: str | None = None
    row_actions: tuple[str, ...] = ()
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "EditableTableContent":
        table = _require_mapping(cls.TYPE, "tableConfig", _pick(obj, "tableConfig", "table_config"))
        actions = []
        for ra in table.get("rowActions") or []:
            name = _function_name(ra)
            if name:
                actions.append(name)
        return cls(
            data_loader=_require_function(cls.TYPE, "dataLoader", _pick(obj, "dataLoader", "data_loader")),
            table_config=table,
            item_updater=_function_name(table.get("itemUpdater")),
            row_actions=tuple(actions),
            raw=obj,
        )

    def function_names(self) -> list[str]:
        names = [self.data_loader]
        if self.item_updater:
            names.append(self.item_updater)
        names.extend(self.row_actions)
        return names


@dataclass(frozen=True)
class EditFormContent(ToolContent):
    TYPE: ClassVar[str] = "editForm"

    on_submit: str
    form_config: Mapping[str, Any]
    data_loader: str | None = None
    extra_functions: tuple[str, ...] = ()
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "EditFormContent":
        form = _require_mapping(cls.TYPE, "formConfig", _pick(obj, "formConfig", "form_config"))
        extra: list[str] = []
        # options loaders on select-like fields, then the cancel handler
        for f in form.get("fields") or []:
            if not isinstance(f, Mapping):
                continue
            opts = f.get("editorOptions")
            if isinstance(opts, Mapping):
                name = _function_name(opts.get("optionsLoader"))
                if name:
                    extra.append(name)
        cancel = form.get("cancelButton")
        if isinstance(cancel, Mapping):
            name = _function_name(cancel)
            if name:
                extra.append(name)
        return cls(
            on_submit=_require_function(cls.TYPE, "onSubmit", _pick(obj, "onSubmit", "on_submit")),
            form_config=form,
            data_loader=_function_name(_pick(obj, "dataLoader", "data_loader")),
            extra_functions=tuple(extra),
            raw=obj,
        )

    def function_names(self) -> list[str]:
        names = [self.on_submit]
        if self.data_loader:
            names.insert(0, self.data_loader)
        names.extend(self.extra_functions)
        return names


CONTENT_VARIANTS: dict[str, type] = {
    DisplayRecordContent.TYPE: DisplayRecordContent,
    ActionButtonContent.TYPE: ActionButtonContent,
    EditableTableContent.TYPE: EditableTableContent,
    EditFormContent.TYPE: EditFormContent,
}


def parse_content(obj: Any) -> ToolContent:
    if isinstance(obj, ToolContent):
        return obj
    if not isinstance(obj, Mapping):
        raise ToolValidationError("content must be an object with a 'type' field")
    ctype = obj.get("type")
    variant = CONTENT_VARIANTS.get(ctype) if isinstance(ctype, str) else None
    if variant is None:
        known = ", ".join(CONTENT_VARIANTS)
        raise ToolValidationError(f"Unknown content type {ctype!r}. Known types: {known}")
    return variant.from_mapping(obj)


@dataclass
class ToolSpec:
    id: str
    title: str
    content: Any
    functions: dict[str, ToolFunction] = field(default_factory=dict)
    inputs: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.content = parse_content(self.content)

    def function_names(self) -> list[str]:
        return list(self.functions.keys())

    @staticmethod
    def from_obj(obj: Any) -> "ToolSpec":
        """Validate the structural shape of ``obj`` and return a ToolSpec.

        Accepts a ToolSpec, a mapping, or any object exposing the fields as
        attributes. Raises ToolValidationError on the first problem found.
        """
        if isinstance(obj, ToolSpec):
            spec = obj
        else:
            if obj is None:
                raise ToolValidationError("tool spec must be an object")
            spec = ToolSpec(
                id=get_field(obj, "id"),
                title=get_field(obj, "title"),
                content=_content_or_raise(get_field(obj, "content")),
                functions=get_field(obj, "functions"),
                inputs=get_field(obj, "inputs") or {},
            )

        if not isinstance(spec.id, str) or not spec.id.strip():
            raise ToolValidationError("missing required id or title")
        if not isinstance(spec.title, str) or not spec.title.strip():
            raise ToolValidationError("missing required id or title")
        if not isinstance(spec.functions, Mapping):
            raise ToolValidationError(f"tool '{spec.id}' missing required functions object")
        if not isinstance(spec.inputs, Mapping):
            raise ToolValidationError(f"tool '{spec.id}' inputs must be a mapping")
        referenced = spec.content.function_names()
        if referenced and not spec.functions:
            raise ToolValidationError(
                f"tool '{spec.id}' content references {', '.join(referenced)} but functions is empty"
            )
        return spec


def _content_or_raise(content: Any) -> Any:
    if content is None:
        raise ToolValidationError("missing required content")
    return content

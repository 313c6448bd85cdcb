"""
Request binding - Decode path, query and JSON body into a request model.

A request model is a Pydantic model whose fields are tagged with the
sources that may populate them:

    class GetUserRequest(BaseModel):
        id: Annotated[str, FromPath("id")] = ""
        verbose: Annotated[bool, FromQuery()] = False

Every field is also bindable from the JSON body under its alias (or name).
Binding runs three partial passes over one field map, in a fixed order:
path, then query, then body. A later pass overwrites what an earlier pass
set, so the body wins over the query string, which wins over the path.

Each pass type-checks the values it sets and stops on the first failure.
The map keeps the raw values, and the model's own validators run on them
exactly once, when build() constructs the model.
"""

import json
import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo

from src.domain.exceptions import BindingError

ModelT = TypeVar("ModelT", bound=BaseModel)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class FromPath:
    """Bind the field from a path parameter (defaults to the field name)."""

    name: str | None = None


@dataclass(frozen=True)
class FromQuery:
    """Bind the field from a query-string parameter (defaults to the field name)."""

    name: str | None = None


@dataclass(frozen=True)
class FieldPlan:
    """How a single model field is fed from each source."""

    name: str
    key: str
    path_key: str | None
    query_key: str | None
    sequence: bool
    adapter: TypeAdapter[Any]


@dataclass
class BoundValues:
    """Raw values set by the binding passes, keyed like model input."""

    values: dict[str, Any] = field(default_factory=dict)
    sources: dict[str, str] = field(default_factory=dict)

    def set(self, key: str, value: Any, source: str) -> None:
        self.values[key] = value
        self.sources[key] = source


def _is_sequence(annotation: Any) -> bool:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return any(_is_sequence(arg) for arg in get_args(annotation) if arg is not type(None))
    return (origin or annotation) in _SEQUENCE_TYPES


def _plan_field(name: str, info: FieldInfo) -> FieldPlan:
    path_key = query_key = None
    for marker in info.metadata:
        if isinstance(marker, FromPath):
            path_key = marker.name or name
        elif isinstance(marker, FromQuery):
            query_key = marker.name or name

    key = info.validation_alias if isinstance(info.validation_alias, str) else None
    key = key or info.alias or name

    # Bare type only: constraints and validators belong to build()
    return FieldPlan(
        name=name,
        key=key,
        path_key=path_key,
        query_key=query_key,
        sequence=_is_sequence(info.annotation),
        adapter=TypeAdapter(info.annotation),
    )


def _describe(exc: ValidationError, sources: Mapping[str, str] | None = None) -> str:
    parts = []
    for error in exc.errors():
        loc = [str(item) for item in error["loc"]]
        if loc and sources and loc[0] in sources:
            loc[0] = sources[loc[0]]
        where = ".".join(loc)
        parts.append(f"{where}: {error['msg']}" if where else error["msg"])
    return "; ".join(parts)


class RequestBinder(Generic[ModelT]):
    """
    Binding plan for one request model.

    Built once per handler at registration time; holds no per-request
    state, so a single binder serves concurrent requests.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model
        self.fields = tuple(_plan_field(name, info) for name, info in model.model_fields.items())

    def bind(
        self,
        path_params: Mapping[str, str],
        query_params: Mapping[str, Sequence[str]],
        body: bytes,
    ) -> ModelT:
        """
        Run all three passes and build the request model.

        Raises:
            BindingError: If any source cannot be decoded
        """
        bound = BoundValues()
        self.bind_path(bound, path_params)
        self.bind_query(bound, query_params)
        self.bind_json(bound, body)
        return self.build(bound)

    def bind_path(self, bound: BoundValues, path_params: Mapping[str, str]) -> None:
        """Set fields tagged FromPath from the matched path parameters."""
        for plan in self.fields:
            if plan.path_key is None or plan.path_key not in path_params:
                continue
            self._set(bound, plan, path_params[plan.path_key], f"path parameter {plan.path_key!r}")

    def bind_query(self, bound: BoundValues, query_params: Mapping[str, Sequence[str]]) -> None:
        """
        Set fields tagged FromQuery from the query string.

        Sequence fields receive every value of a repeated key; scalar
        fields receive the first one.
        """
        for plan in self.fields:
            if plan.query_key is None:
                continue
            raw = query_params.get(plan.query_key)
            if not raw:
                continue
            value = list(raw) if plan.sequence else raw[0]
            self._set(bound, plan, value, f"query parameter {plan.query_key!r}")

    def bind_json(self, bound: BoundValues, body: bytes) -> None:
        """
        Overlay keys from a JSON object body.

        An empty body or a JSON null leaves the values untouched. Keys that
        match no field are ignored.
        """
        if not body.strip():
            return

        try:
            document = json.loads(body)
        except (ValueError, RecursionError) as e:
            raise BindingError(f"invalid JSON body: {e}") from e

        if document is None:
            return
        if not isinstance(document, dict):
            raise BindingError(f"JSON body must be an object, got {type(document).__name__}")

        for plan in self.fields:
            if plan.key in document:
                self._set(bound, plan, document[plan.key], f"body field {plan.key!r}")

    def build(self, bound: BoundValues) -> ModelT:
        """Construct the model; fields no pass touched keep their defaults."""
        try:
            return self.model.model_validate(dict(bound.values))
        except ValidationError as e:
            raise BindingError(_describe(e, bound.sources)) from e

    def openapi_parameters(self) -> list[dict[str, Any]]:
        """OpenAPI parameter objects for the path and query fields."""
        parameters = []
        for plan in self.fields:
            sources = (("path", plan.path_key), ("query", plan.query_key))
            for location, name in sources:
                if name is None:
                    continue
                parameters.append(
                    {
                        "name": name,
                        "in": location,
                        "required": location == "path",
                        "schema": plan.adapter.json_schema(),
                    }
                )
        return parameters

    @staticmethod
    def _set(bound: BoundValues, plan: FieldPlan, value: Any, source: str) -> None:
        try:
            plan.adapter.validate_python(value)
        except ValidationError as e:
            raise BindingError(f"{source}: {_describe(e)}") from e
        except RecursionError as e:
            raise BindingError(f"{source}: value nested too deeply") from e
        bound.set(plan.key, value, source)

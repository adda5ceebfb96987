"""Template parsing and condition evaluation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, cast

import cfn_flip
import yaml

from ..exceptions import TemplateParseError
from .models import TemplateDocument

if TYPE_CHECKING:
    from .._logging import StackviewLogger

LOGGER = cast("StackviewLogger", logging.getLogger(__name__))


class Unresolvable(Exception):
    """An expression depends on something that is not known locally."""


class ConditionResolver:
    """Evaluate the ``Conditions`` section of a template.

    Only the intrinsic functions that can appear in a condition are
    supported (``Fn::Equals``, ``Fn::Not``, ``Fn::And``, ``Fn::Or`` and
    ``Condition``) together with ``Ref`` to parameters and pseudo parameters.

    """

    def __init__(
        self,
        conditions: Mapping[str, Any],
        *,
        parameters: Mapping[str, Any] | None = None,
        template_parameters: Mapping[str, Any] | None = None,
        pseudo_parameters: Mapping[str, Any] | None = None,
    ) -> None:
        """Instantiate class.

        Args:
            conditions: The ``Conditions`` section of a template.
            parameters: Parameter values of the deployed stack.
            template_parameters: The ``Parameters`` section of the template,
                used for ``Default`` values.
            pseudo_parameters: Known pseudo parameters (e.g. ``AWS::Region``).

        """
        self.conditions = conditions
        self.parameters = parameters or {}
        self.template_parameters = template_parameters or {}
        self.pseudo_parameters = pseudo_parameters or {}
        self._resolved: dict[str, bool] = {}
        self._resolving: set[str] = set()

    def resolve(self) -> dict[str, Any]:
        """Resolve every condition, keeping the raw expression of those that can't be."""
        result: dict[str, Any] = {}
        for name, expression in self.conditions.items():
            try:
                result[name] = self.condition(name)
            except Unresolvable as err:
                LOGGER.debug("unable to resolve condition %s: %s", name, err)
                result[name] = expression
        return result

    def condition(self, name: str) -> bool:
        """Resolve a single named condition."""
        if name in self._resolved:
            return self._resolved[name]
        if name not in self.conditions:
            raise Unresolvable(f"condition {name} is not defined")
        if name in self._resolving:
            raise Unresolvable(f"condition {name} references itself")
        self._resolving.add(name)
        try:
            value = self.evaluate(self.conditions[name])
        finally:
            self._resolving.discard(name)
        self._resolved[name] = value
        return value

    def evaluate(self, expression: Any) -> bool:
        """Evaluate a boolean expression."""
        if isinstance(expression, bool):
            return expression
        if isinstance(expression, str) and expression.lower() in ("true", "false"):
            return expression.lower() == "true"
        if isinstance(expression, Mapping) and len(expression) == 1:
            function, args = next(iter(expression.items()))
            if function == "Condition":
                return self.condition(str(args))
            if function == "Fn::Equals":
                left, right = self._arguments(function, args, 2)
                return self.value(left) == self.value(right)
            if function == "Fn::Not":
                (operand,) = self._arguments(function, args, 1)
                return not self.evaluate(operand)
            if function == "Fn::And":
                return all(self.evaluate(i) for i in self._arguments(function, args))
            if function == "Fn::Or":
                return any(self.evaluate(i) for i in self._arguments(function, args))
        raise Unresolvable(f"unsupported expression {expression!r}")

    def value(self, expression: Any) -> str:
        """Resolve a scalar expression to its string value."""
        if isinstance(expression, bool):
            return str(expression).lower()
        if isinstance(expression, (str, int, float)):
            return str(expression)
        if isinstance(expression, Mapping) and list(expression) == ["Ref"]:
            return self.ref(str(expression["Ref"]))
        raise Unresolvable(f"unsupported value {expression!r}")

    def ref(self, name: str) -> str:
        """Resolve a ``Ref`` to a parameter or pseudo parameter."""
        if name in self.parameters:
            return str(self.parameters[name])
        declared = self.template_parameters.get(name)
        if isinstance(declared, Mapping) and "Default" in declared:
            return self.value(declared["Default"])
        if name in self.pseudo_parameters:
            return str(self.pseudo_parameters[name])
        raise Unresolvable(f"no value for Ref {name}")

    @staticmethod
    def _arguments(function: str, args: Any, count: int | None = None) -> list[Any]:
        if not isinstance(args, list) or (count is not None and len(args) != count):
            raise Unresolvable(f"invalid arguments for {function}: {args!r}")
        return args


def load_template(body: str | Mapping[str, Any], stack_name: str) -> dict[str, Any]:
    """Load a JSON or YAML template body.

    Short form intrinsic functions (e.g. ``!Equals``) are converted to their
    long form.

    Raises:
        TemplateParseError: The body is not a valid template.

    """
    if isinstance(body, Mapping):
        return dict(body)
    try:
        data, fmt = cfn_flip.load(body)
    except (ValueError, yaml.YAMLError) as err:
        raise TemplateParseError(stack_name, str(err)) from err
    if not isinstance(data, Mapping):
        raise TemplateParseError(stack_name, "template body is not a mapping")
    LOGGER.debug("loaded %s template of stack %s", fmt, stack_name)
    return dict(data)


def parse_template(
    body: str | Mapping[str, Any],
    parameters: Mapping[str, Any] | None = None,
    *,
    pseudo_parameters: Mapping[str, Any] | None = None,
    stack_name: str = "",
) -> TemplateDocument:
    """Parse a template body into a :class:`TemplateDocument`.

    Args:
        body: Template body as returned by the control plane.
        parameters: Parameter name to effective value, used to resolve
            conditions.
        pseudo_parameters: Known pseudo parameter values.
        stack_name: Name of the stack the template belongs to.

    Raises:
        TemplateParseError: The body is not a valid template.

    """
    template = load_template(body, stack_name)
    for section in ("Rules", "Conditions", "Parameters"):
        if not isinstance(template.get(section) or {}, Mapping):
            raise TemplateParseError(stack_name, f"{section} section is not a mapping")
    conditions = ConditionResolver(
        template.get("Conditions") or {},
        parameters=parameters,
        template_parameters=template.get("Parameters") or {},
        pseudo_parameters=pseudo_parameters,
    ).resolve()
    description = template.get("Description")
    format_version = template.get("AWSTemplateFormatVersion")
    return TemplateDocument(
        description=None if description is None else str(description),
        format_version=None if format_version is None else str(format_version),
        rules=dict(template.get("Rules") or {}),
        conditions=conditions,
    )

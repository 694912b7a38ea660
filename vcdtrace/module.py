"""Module scopes that group traced values into a VCD hierarchy."""

from __future__ import annotations

import io
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO, Union

from vcdtrace.value import AddFn, DumperFn, Value, ValueContext

RegisterFn = Callable[[str, DumperFn], ValueContext]


@dataclass
class ModuleInstance:
    """The header text and children of one module instance."""

    instance_name: str
    vcd_scope: io.StringIO = field(default_factory=io.StringIO)
    children: list[ModuleInstance] = field(default_factory=list)


class Module:
    """A ``$scope module`` in the VCD header.

    A module is created either from a registration function, which
    assigns identifiers to the values declared below it, or from a parent
    module, in which case it becomes one of the parent's children.
    Modules are only needed while values are being elaborated.
    """

    def __init__(self, scope: Union[Module, RegisterFn], instance_name: str) -> None:
        context = ModuleInstance(instance_name)
        context.vcd_scope.write(f"$scope module {instance_name} $end\n")
        if isinstance(scope, Module):
            self._register_fn: RegisterFn = scope._register_var
            scope._require_context().children.append(context)
        else:
            self._register_fn = scope
        self._context: ModuleInstance | None = context

    @property
    def instance_name(self) -> str:
        """The name of this module instance."""
        return self._require_context().instance_name

    def _require_context(self) -> ModuleInstance:
        if self._context is None:
            raise RuntimeError("the module header has already been finalized")
        return self._context

    def elaborate(self, var: Value, var_name: str) -> None:
        """Declare an already created value inside this module."""
        var.elaborate(self.get_add_fn(), var_name)

    def get_add_fn(self) -> AddFn:
        """Return the function a value uses to declare itself in this module."""
        return self._add_var

    def get_module(self, child_name: str) -> Module:
        """Create a child module of this one."""
        return Module(self, child_name)

    def finalize_header(self, out: TextIO) -> None:
        """Write this module's header section, with its children, to ``out``.

        The module's scope is released afterwards, so a second call
        writes nothing.
        """
        if self._context is not None:
            self._write_scope(out, self._context)
        self._context = None

    def _write_scope(self, out: TextIO, context: ModuleInstance) -> None:
        out.write(context.vcd_scope.getvalue())
        for child in context.children:
            self._write_scope(out, child)
        out.write("$upscope $end\n")

    def _add_var(
        self, var_name: str, var_type: str, bit_size: int, fn: DumperFn
    ) -> ValueContext:
        context = self._require_context()
        value_context = self._register_fn(f"{context.instance_name}.{var_name}", fn)
        context.vcd_scope.write(
            f"$var {var_type} {bit_size} {value_context.identifier} {var_name} $end\n"
        )
        return value_context

    def _register_var(self, child_path: str, fn: DumperFn) -> ValueContext:
        context = self._require_context()
        return self._register_fn(f"{context.instance_name}.{child_path}", fn)
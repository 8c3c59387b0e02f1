"""Entities that own a transform and a set of named components."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator

from bananaengine.transform import Transform

log = logging.getLogger(__name__)


class Component(ABC):
    """Behaviour attached to an entity, identified by its name."""

    def __init__(self, name: str = "") -> None:
        self.name = name

    @abstractmethod
    def on_update(self, dt: float, transform: Transform) -> None:
        """Advance by ``dt`` seconds, drawing with the owner's ``transform``."""


class Entity:
    """A transform plus an ordered collection of uniquely named components."""

    def __init__(self, transform: Transform | None = None) -> None:
        self.transform = transform if transform is not None else Transform()
        self._components: list[Component] = []

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._components)

    def __iter__(self) -> Iterator[Component]:
        return iter(tuple(self._components))

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, name: object) -> bool:
        return any(comp.name == name for comp in self._components)

    def add_component(self, component: Component) -> bool:
        """Attach ``component`` unless one with its name is already attached.

        Returns whether it was attached.
        """
        if component.name in self:
            return False
        self._components.append(component)
        return True

    def remove_component(self, name: str) -> Component:
        """Detach and return the component called ``name``."""
        for index, comp in enumerate(self._components):
            if comp.name == name:
                return self._components.pop(index)
        raise KeyError(f"component to remove does not exist: {name!r}")

    def get_component(self, name: str) -> Component | None:
        """The component called ``name``, or None if there is none."""
        for comp in self._components:
            if comp.name == name:
                return comp
        log.info("Could not find component %r", name)
        return None

    def render(self, dt: float) -> None:
        """Update every component in attachment order with this entity's transform."""
        for comp in tuple(self._components):
            comp.on_update(dt, self.transform)
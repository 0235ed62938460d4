"""Notification-driven facade around a single multi-step container."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from contextlib import AbstractContextManager

from multistep.config import MultiStepOptions, OptionsLayer, resolve_options
from multistep.diagnostics import DiagnosticsSink, MisuseReporter, StructuralMisuse
from multistep.logging_context import FormLogContext, bound_context, install_record_factory
from multistep.navigation.controller import BeforeStepChange, NavigationController
from multistep.projector import project_view_model
from multistep.step_registry import StepRegistry
from multistep.types import StepLabel, ViewModel
from multistep.validation import ValidationGate

logger = logging.getLogger(__name__)


class MultiStepForm:
    """Own the registry, gate and controller of one container.

    The host tree only sends notifications (``on_*`` methods) and reads
    :meth:`get_view_model`; it never mutates the engine state directly. Every
    notification runs to completion before returning.
    """

    def __init__(
        self,
        options: OptionsLayer = None,
        *,
        defaults: OptionsLayer = None,
        form_id: str | None = None,
        diagnostics: DiagnosticsSink | None = None,
        before_step_change: BeforeStepChange | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.form_id = form_id or uuid.uuid4().hex[:8]
        self.registry = StepRegistry()
        self.gate = ValidationGate(self.registry)
        self.controller = NavigationController(
            registry=self.registry,
            gate=self.gate,
            options=resolve_options(defaults, options, env=env),
            before_step_change=before_step_change,
        )
        self._misuse = MisuseReporter(diagnostics)
        install_record_factory()

    @property
    def options(self) -> MultiStepOptions:
        return self.controller.options

    @property
    def active_key(self) -> str | None:
        return self.controller.active_key

    def update_options(self, options: OptionsLayer) -> MultiStepOptions:
        """Overlay ``options`` on the current snapshot, e.g. when props change."""

        self.controller.options = resolve_options(self.controller.options, options, env={})
        return self.controller.options

    # ------------------------------------------------------------------
    # Tree notifications
    # ------------------------------------------------------------------
    def on_node_mount(self, node_id: str, node_type: str, parent_type: str | None) -> StructuralMisuse | None:
        """Check the placement of a node attaching inside (or near) this container."""

        with self._context():
            return self._misuse.check_placement(node_id, node_type, parent_type)

    def on_node_unmount(self, node_id: str) -> None:
        self._misuse.forget(node_id)

    def on_step_mount(self, key: str, declared_index: int, *, label: StepLabel | None = None) -> bool:
        with self._context():
            step = self.registry.register(key, declared_index, label=label)
            if step is None:
                logger.debug("Ignoring mount of already attached step '%s'", key)
                return False
            self.gate.sync(key)
            self.controller.reconcile()
            return True

    def on_step_unmount_conditional(self, key: str) -> bool:
        with self._context():
            if not self.registry.detach(key):
                return False
            self.controller.reconcile()
            return True

    def on_step_unmount_permanent(self, key: str) -> bool:
        with self._context():
            if self.registry.remove(key) is None:
                return False
            self.gate.forget(key)
            self.controller.reconcile()
            return True

    def on_step_moved(self, key: str, declared_index: int) -> bool:
        with self._context():
            if not self.registry.move(key, declared_index):
                return False
            self.controller.reconcile()
            return True

    def on_declared_order(self, keys: Iterable[str]) -> bool:
        with self._context():
            if not self.registry.apply_declared_order(keys):
                return False
            self.controller.reconcile()
            return True

    def on_field_validation_changed(self, step_key: str, is_blocking: bool, *, field: str | None = None) -> bool:
        with self._context():
            return self.gate.set_blocking(step_key, is_blocking, source=field)

    # ------------------------------------------------------------------
    # Renderer-facing API
    # ------------------------------------------------------------------
    def get_view_model(self, *, lang: str = "en") -> ViewModel:
        return project_view_model(self.registry, self.controller, lang=lang)

    def next(self) -> bool:
        with self._context():
            return self.controller.next()

    def previous(self) -> bool:
        with self._context():
            return self.controller.previous()

    def go_to(self, key: str) -> bool:
        with self._context():
            return self.controller.go_to(key)

    def _context(self) -> AbstractContextManager[FormLogContext]:
        return bound_context(self.form_id, self.controller.active_key)


__all__ = ["MultiStepForm"]

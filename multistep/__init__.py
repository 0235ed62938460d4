"""Headless navigation engine for multi-step forms."""

from __future__ import annotations

from multistep.config import MultiStepConfigError, MultiStepOptions, resolve_options
from multistep.diagnostics import (
    DiagnosticsSink,
    LoggingDiagnosticsSink,
    MisuseReporter,
    StructuralMisuse,
)
from multistep.form import MultiStepForm
from multistep.navigation.controller import NavigationController
from multistep.projector import project_view_model
from multistep.step_registry import StepRegistry
from multistep.types import NavigationPhase, Step, StepView, TabStyle, ViewModel
from multistep.validation import ValidationGate

__version__ = "0.1.0"

__all__ = [
    "DiagnosticsSink",
    "LoggingDiagnosticsSink",
    "MisuseReporter",
    "MultiStepConfigError",
    "MultiStepForm",
    "MultiStepOptions",
    "NavigationController",
    "NavigationPhase",
    "Step",
    "StepRegistry",
    "StepView",
    "TabStyle",
    "ValidationGate",
    "ViewModel",
    "project_view_model",
    "resolve_options",
]

"""Navigation state machine for multi-step containers.

Streamlit bindings live in :mod:`multistep.navigation.ui` and are imported
explicitly so the core stays usable without a running Streamlit app.
"""

from __future__ import annotations

from multistep.navigation.controller import BeforeStepChange, NavigationController
from multistep.navigation.keys import FormSessionKeys

__all__ = [
    "BeforeStepChange",
    "FormSessionKeys",
    "NavigationController",
]

"""
Guidewire Navigation Demo
导丝沿血管中心线推进的交互式仿真（1-D 简化模型 + 余量碰撞判定）
"""

__version__ = "0.1.0"

from guidewire_navigation_demo.centerline import (
    CenterlineError,
    as_centerline,
    curved_centerline,
    load_centerline,
    point_at,
    resample,
    straight_centerline,
)
from guidewire_navigation_demo.config import SimulationConfig
from guidewire_navigation_demo.curvature import estimate_curvature
from guidewire_navigation_demo.logging_config import setup_logging
from guidewire_navigation_demo.navigation import (
    GuidewireNavigator,
    NavigationParams,
    NavigationState,
    RunState,
    WireInput,
    input_from_keys,
    reset,
    simulate,
    tick,
)
from guidewire_navigation_demo.radius_model import (
    CallableRadiusModel,
    RadiusModel,
    Stenosis,
    StenosisRadiusModel,
)

__all__ = [
    "__version__",
    "CenterlineError",
    "as_centerline",
    "curved_centerline",
    "load_centerline",
    "point_at",
    "resample",
    "straight_centerline",
    "SimulationConfig",
    "estimate_curvature",
    "setup_logging",
    "GuidewireNavigator",
    "NavigationParams",
    "NavigationState",
    "RunState",
    "WireInput",
    "input_from_keys",
    "reset",
    "simulate",
    "tick",
    "CallableRadiusModel",
    "RadiusModel",
    "Stenosis",
    "StenosisRadiusModel",
]

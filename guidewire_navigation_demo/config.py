"""
仿真配置 - 渲染层使用的调参值和按键绑定
核心状态机的常数见 navigation.NavigationParams 和 radius_model
"""

from dataclasses import dataclass, field

from guidewire_navigation_demo.navigation import FORWARD_SPEED, TWIST_STEP, WIRE_RADIUS


@dataclass
class KeyBindings:
    """pygame 版的按键（小写键名）"""
    advance: tuple = ("w", "up")
    withdraw: tuple = ("s", "down")
    twist_left: tuple = ("q",)
    twist_right: tuple = ("e",)
    pause: str = "p"
    reset: str = "r"
    quit: str = "escape"


@dataclass
class SimulationConfig:
    wire_radius: float = WIRE_RADIUS
    forward_speed: float = FORWARD_SPEED
    twist_step: float = TWIST_STEP
    wire_samples: int = 80          # 导丝重采样点数
    vessel_samples: int = 160       # 血管整管重采样点数
    centerline: str = "curved"      # "curved" / "straight" / 文件路径
    smooth_sigma: float = 0.0
    fps: int = 60
    keys: KeyBindings = field(default_factory=KeyBindings)

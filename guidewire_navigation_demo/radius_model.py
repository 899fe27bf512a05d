"""
Radius Model - 有效管腔半径
基准半径 × 狭窄曲线 × (1 - 弯曲惩罚)，并设最小半径下限

默认参数只是演示值，不代表生理约束；可以替换成任意 (centerline, u) -> radius 的模型
"""

from dataclasses import dataclass

import numpy as np

from guidewire_navigation_demo.curvature import estimate_curvature

BASELINE_RADIUS = 2.8
PENALTY_GAIN = 0.15
PENALTY_CAP = 0.6
RADIUS_FLOOR = 0.6


@dataclass(frozen=True)
class Stenosis:
    """高斯型局部狭窄，depth=0.6 表示中心处半径减少 60%"""
    center: float = 0.55
    width: float = 0.06
    depth: float = 0.6

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"stenosis width must be positive, got {self.width}")
        if not 0.0 <= self.depth <= 1.0:
            raise ValueError(f"stenosis depth must be in [0, 1], got {self.depth}")

    def multiplier(self, u):
        g = np.exp(-((u - self.center) ** 2) / (2 * self.width ** 2))
        return 1.0 - self.depth * g


class RadiusModel:
    """有效半径模型基类"""

    def effective_radius(self, centerline, u):
        raise NotImplementedError

    def __call__(self, centerline, u):
        return self.effective_radius(centerline, u)


class StenosisRadiusModel(RadiusModel):
    """
    默认半径模型

    stenoses: 一个或多个狭窄，乘积叠加
    profile: 可选的 u -> 倍率函数，传入时替代高斯狭窄
    """

    def __init__(self, baseline=BASELINE_RADIUS, stenoses=(Stenosis(),), profile=None,
                 penalty_gain=PENALTY_GAIN, penalty_cap=PENALTY_CAP, floor=RADIUS_FLOOR):
        self.baseline = baseline
        self.stenoses = tuple(stenoses)
        self.profile = profile
        self.penalty_gain = penalty_gain
        self.penalty_cap = penalty_cap
        self.floor = floor

    def stenosis_multiplier(self, u):
        if self.profile is not None:
            return float(self.profile(u))
        m = 1.0
        for s in self.stenoses:
            m *= s.multiplier(u)
        return float(m)

    def bend_penalty(self, centerline, u):
        """弯曲越急，刚性导丝"看到"的半径越小"""
        kappa = estimate_curvature(centerline, u)
        return min(self.penalty_cap, kappa * self.penalty_gain)

    def effective_radius(self, centerline, u):
        radius = self.baseline * self.stenosis_multiplier(u)
        radius *= 1.0 - self.bend_penalty(centerline, u)
        return max(self.floor, radius)


class CallableRadiusModel(RadiusModel):
    """把普通函数 (centerline, u) -> radius 包装成模型"""

    def __init__(self, func):
        self.func = func

    def effective_radius(self, centerline, u):
        return float(self.func(centerline, u))


DEFAULT_RADIUS_MODEL = StenosisRadiusModel()
NO_STENOSIS = StenosisRadiusModel(stenoses=())


def radius_profile(centerline, model=None, sample_count=200):
    """沿中心线采样有效半径"""
    model = model or DEFAULT_RADIUS_MODEL
    us = np.linspace(0.0, 1.0, sample_count)
    radii = np.array([model(centerline, u) for u in us])
    return us, radii

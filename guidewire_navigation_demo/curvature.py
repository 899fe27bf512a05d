"""
Curvature Estimator - 中心线曲率估计
用三点有限差分估计局部弯曲程度（角度 / 弧长参数）
"""

import numpy as np

from guidewire_navigation_demo.centerline import point_at

CURVATURE_EPS = 0.002
MIN_CHORD = 1e-5
MAX_SAMPLE_U = 0.999


def estimate_curvature(centerline, u, eps=CURVATURE_EPS):
    """
    在 u-eps, u, u+eps 处取三点，返回两段弦夹角 / eps

    弦长过短（静止或退化区域）时返回 0
    """
    # u 超过最后一个采样位置时，中间点会跑到右侧点之后
    u = min(max(u, 0.0), MAX_SAMPLE_U)
    p0 = point_at(centerline, max(0.0, u - eps))
    p1 = point_at(centerline, u)
    p2 = point_at(centerline, min(MAX_SAMPLE_U, u + eps))

    v01 = p1 - p0
    v12 = p2 - p1
    a = np.linalg.norm(v01)
    b = np.linalg.norm(v12)
    if a < MIN_CHORD or b < MIN_CHORD:
        return 0.0

    cos_angle = np.clip(np.dot(v01, v12) / (a * b), -1.0, 1.0)
    return float(np.arccos(cos_angle) / eps)


def curvature_profile(centerline, sample_count=200):
    """沿整条中心线采样曲率，用于绘图"""
    us = np.linspace(0.0, 1.0, sample_count)
    kappa = np.array([estimate_curvature(centerline, u) for u in us])
    return us, kappa

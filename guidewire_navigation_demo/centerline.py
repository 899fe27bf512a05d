"""
Vessel Centerline - 血管中心线
中心线的接收校验、Catmull-Rom 插值取点、按进度重采样，以及内置演示中心线

中心线统一用 (n, 3) 的只读 numpy 数组表示，u 为按索引归一化的进度 [0, 1]
"""

import logging
import os

import numpy as np
from scipy.ndimage import gaussian_filter1d

logger = logging.getLogger(__name__)

# 最后一段的索引余量，保证 u=1 时仍落在最后一段内
INDEX_SLACK = 1e-4
# 重采样的最小终点，避免导丝长度为 0
MIN_U_END = 1e-3

INTERPOLATION_METHODS = ("catmull", "linear")


class CenterlineError(ValueError):
    """中心线数据不合法（形状错误或包含非有限值）"""


def as_centerline(points):
    """
    校验并转换为只读的 (n, 3) float 数组

    非有限坐标会破坏后续所有几何，所以在这里直接报错
    """
    arr = np.array(points, dtype=float)
    if arr.size == 0:
        arr = arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise CenterlineError(f"centerline must have shape (n, 3), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        bad = np.argwhere(~np.isfinite(arr).all(axis=1)).ravel()
        raise CenterlineError(f"centerline has non-finite coordinates at rows {bad.tolist()}")
    arr.flags.writeable = False
    return arr


def catmull_rom(p0, p1, p2, p3, t):
    """均匀 Catmull-Rom 样条，t ∈ [0, 1] 时从 p1 插值到 p2"""
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        2 * p1
        + (-p0 + p2) * t
        + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t2
        + (-p0 + 3 * p1 - 3 * p2 + p3) * t3
    )


def point_at(centerline, u, method="catmull"):
    """
    获取中心线上进度 u 处的点

    u 会被截断到最后一段可寻址的范围内，任意实数都可以传入
    """
    if method not in INTERPOLATION_METHODS:
        raise ValueError(f"unknown interpolation method: {method!r}")

    # 也接受普通的点列表
    centerline = np.asarray(centerline, dtype=float)
    n = len(centerline)
    if n == 0:
        return np.zeros(3)
    if n == 1:
        return np.array(centerline[0], dtype=float)

    if np.isnan(u):
        u = 0.0
    seg_float = min(max(u * (n - 1), 0.0), n - 1 - INDEX_SLACK)
    i = int(np.floor(seg_float))
    t = seg_float - i

    if method == "linear":
        return centerline[i] + (centerline[i + 1] - centerline[i]) * t

    # 端点处控制点重复，两端自然收尾不过冲
    i0 = max(0, i - 1)
    i2 = min(n - 1, i + 1)
    i3 = min(n - 1, i + 2)
    return catmull_rom(centerline[i0], centerline[i], centerline[i2], centerline[i3], t)


def resample(centerline, u_end, sample_count=80, method="catmull"):
    """在 [0, u_end] 上均匀取 sample_count 个点，返回 (sample_count, 3) 数组"""
    if sample_count < 1:
        raise ValueError(f"sample_count must be >= 1, got {sample_count}")

    u_end = max(u_end, MIN_U_END)
    if sample_count == 1:
        return point_at(centerline, 0.0, method)[np.newaxis, :]

    out = np.zeros((sample_count, 3))
    for k, u in enumerate(np.linspace(0.0, u_end, sample_count)):
        out[k] = point_at(centerline, u, method)
    return out


# ============== 内置演示中心线 ==============

def straight_centerline(num_points=80, spacing=2.0):
    """沿 Z 轴的直血管"""
    z = np.arange(num_points) * spacing
    return as_centerline(np.column_stack([np.zeros(num_points), np.zeros(num_points), z]))


def curved_centerline(num_points=160):
    """S 形弯曲血管"""
    i = np.arange(num_points)
    x = np.sin(i * 0.08) * 6
    y = np.cos(i * 0.04) * 2
    z = i * 1.2
    return as_centerline(np.column_stack([x, y, z]))


DEMO_CENTERLINES = {
    "straight": straight_centerline,
    "curved": curved_centerline,
}


def load_centerline(path, smooth_sigma=0.0):
    """
    从文件读取中心线 (.npy 或文本，每行 x y z)

    smooth_sigma > 0 时沿中心线做高斯平滑，去掉分割得到的锯齿
    """
    if path in DEMO_CENTERLINES:
        points = DEMO_CENTERLINES[path]()
    elif os.path.splitext(path)[1].lower() == ".npy":
        points = np.load(path)
    else:
        with open(path, encoding="utf-8") as f:
            delimiter = "," if "," in f.readline() else None
        points = np.loadtxt(path, delimiter=delimiter, ndmin=2)

    points = np.asarray(points, dtype=float)
    if smooth_sigma > 0 and len(points) > 1:
        points = gaussian_filter1d(points, sigma=smooth_sigma, axis=0, mode="nearest")

    centerline = as_centerline(points)
    logger.info("Loaded centerline %s with %d points", path, len(centerline))
    return centerline

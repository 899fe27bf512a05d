"""
Guidewire Navigation Profile - Matplotlib Version
按固定输入脚本回放一次推进过程，绘制半径/余量曲线和进度、顶推压力随帧变化

适用于：快速检查狭窄参数、生成论文图片、无显示器环境 (--save)
"""

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401

from guidewire_navigation_demo.centerline import load_centerline, resample
from guidewire_navigation_demo.config import SimulationConfig
from guidewire_navigation_demo.curvature import curvature_profile
from guidewire_navigation_demo.navigation import RunState, input_from_keys, simulate
from guidewire_navigation_demo.radius_model import DEFAULT_RADIUS_MODEL, radius_profile


def advance_script(num_ticks, forward_speed):
    """一直按住推进键"""
    return [input_from_keys(advance=True, forward_speed=forward_speed)] * num_ticks


def plot_run(centerline, history, wire_radius, radius_model=None, samples=160):
    """画出一次回放的结果，返回 Figure"""
    radius_model = radius_model or DEFAULT_RADIUS_MODEL
    us, radii = radius_profile(centerline, radius_model, samples)
    _, kappa = curvature_profile(centerline, samples)

    fig = plt.figure(figsize=(14, 9))
    fig.patch.set_facecolor('#1a1a2e')

    # ===== 3D 中心线 + 最终导丝 =====
    ax3d = fig.add_subplot(2, 2, 1, projection='3d')
    vessel = resample(centerline, 1.0, samples)
    ax3d.plot3D(vessel[:, 0], vessel[:, 1], vessel[:, 2], color='#6ea8fe', linewidth=1)
    final = history[-1] if history else None
    if final is not None:
        wire = resample(centerline, final.progress, 80)
        ax3d.plot3D(wire[:, 0], wire[:, 1], wire[:, 2], color='#39e09b', linewidth=3)
        ax3d.scatter(*wire[-1], color='gold', s=60, edgecolors='white')
    ax3d.set_title('Centerline & guidewire', color='white')

    # ===== 半径 / 余量 =====
    ax_r = fig.add_subplot(2, 2, 2)
    ax_r.plot(us, radii, label='effective radius')
    ax_r.plot(us, radii - wire_radius, label='clearance')
    ax_r.axhline(0.0, color='red', linestyle='--', linewidth=1)
    ax_r.fill_between(us, radii - wire_radius, 0, where=radii - wire_radius <= 0, color='red', alpha=0.3)
    ax_k = ax_r.twinx()
    ax_k.plot(us, kappa, color='gray', alpha=0.5, linewidth=1, label='curvature')
    ax_r.set_xlabel('u')
    ax_r.legend(loc='lower left')
    ax_r.set_title('Radius model along centerline', color='white')

    # ===== 进度 / 压力 =====
    ticks = np.arange(1, len(history) + 1)
    progress = np.array([s.progress for s in history])
    overpush = np.array([s.overpush for s in history])
    blocked = np.array([s.collision for s in history], dtype=bool)

    ax_u = fig.add_subplot(2, 2, 3)
    ax_u.plot(ticks, progress, color='#39e09b')
    if blocked.any():
        ax_u.scatter(ticks[blocked], progress[blocked], color='red', s=4, label='blocked')
        ax_u.legend(loc='lower right')
    ax_u.set_xlabel('tick')
    ax_u.set_ylabel('u')
    ax_u.set_title('Progress', color='white')

    ax_p = fig.add_subplot(2, 2, 4)
    ax_p.plot(ticks, overpush, color='orange')
    ax_p.set_xlabel('tick')
    ax_p.set_ylabel('overpush pressure')
    ax_p.set_title('Overpush pressure', color='white')

    if final is not None:
        fig.suptitle(f'Final state: {final.run_state.value} | u = {final.progress:.3f}',
                     color='white', fontsize=14)
    plt.tight_layout()
    return fig


def main(config=None, num_ticks=2400, save_path=None):
    """运行回放并显示（或保存）图像"""
    if num_ticks < 1:
        raise ValueError(f"num_ticks must be >= 1, got {num_ticks}")
    config = config or SimulationConfig()
    centerline = load_centerline(config.centerline, config.smooth_sigma)

    print("=" * 50)
    print("Guidewire Navigation Profile (Matplotlib)")
    print("=" * 50)

    history = simulate(centerline, advance_script(num_ticks, config.forward_speed), config.wire_radius)
    final = history[-1]
    blocked = sum(s.collision for s in history)
    print(f"Ticks: {num_ticks}  Final state: {final.run_state.value}  u = {final.progress:.3f}"
          f"  blocked ticks: {blocked}")
    if final.run_state is RunState.FAIL:
        print("Advance blocked by stenosis, try a smaller --wire-radius")

    fig = plot_run(centerline, history, config.wire_radius, samples=config.vessel_samples)
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
        print(f"Saved figure to {save_path}")
    else:
        plt.show()
    return history


if __name__ == "__main__":
    main()

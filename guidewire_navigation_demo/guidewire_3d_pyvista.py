"""
3D Guidewire Navigation Simulation - PyVista Version
基于PyVista的3D导丝推进仿真演示

安装依赖: pip install pyvista numpy scipy
"""

import numpy as np
import pyvista as pv

from guidewire_navigation_demo.centerline import load_centerline, resample
from guidewire_navigation_demo.config import SimulationConfig
from guidewire_navigation_demo.navigation import GuidewireNavigator, RunState, WireInput
from guidewire_navigation_demo.radius_model import radius_profile

STATE_COLORS = {
    RunState.IDLE: 'white',
    RunState.NAVIGATING: 'cyan',
    RunState.SUCCESS: 'lime',
    RunState.FAIL: 'red',
}


def build_vessel_mesh(centerline, radius_model, samples=160):
    """血管管道，半径沿中心线按有效半径变化（狭窄处变细）"""
    points = resample(centerline, 1.0, samples)
    _, radii = radius_profile(centerline, radius_model, samples)
    line = pv.lines_from_points(points)
    line["radius"] = radii
    return line.tube(scalars="radius", absolute=True, n_sides=36)


def build_wire_mesh(points, wire_radius):
    """导丝管道（每帧重新生成）"""
    return pv.lines_from_points(points).tube(radius=wire_radius, n_sides=14)


class GuidewireSimulation3D:
    """3D导丝仿真主类"""

    def __init__(self, config=None, radius_model=None):
        self.config = config or SimulationConfig()
        centerline = load_centerline(self.config.centerline, self.config.smooth_sigma)
        self.navigator = GuidewireNavigator(centerline, wire_radius=self.config.wire_radius,
                                            radius_model=radius_model)

        # 键盘状态：PyVista 只有按下事件，推进/回撤用锁存方向
        self.drive = 0
        self.pending_twist = 0.0
        self.paused = False
        self.running = True

    def on_drive(self, direction):
        """同方向再按一次停止，反方向直接切换"""
        self.drive = 0 if self.drive == direction else direction

    def on_twist(self, direction):
        self.pending_twist += direction * self.config.twist_step * 5

    def toggle_pause(self):
        self.paused = not self.paused
        print(f"Paused: {self.paused}")

    def reset(self):
        """重置仿真"""
        self.navigator.reset()
        self.drive = 0
        self.pending_twist = 0.0

    def next_input(self):
        wire_input = WireInput(
            du=self.drive * self.config.forward_speed,
            twist_delta=self.pending_twist,
            paused=self.paused,
        )
        self.pending_twist = 0.0
        return wire_input

    def run(self):
        """运行仿真"""
        plotter = pv.Plotter()
        plotter.set_background('black')

        plotter.add_text(
            "3D Guidewire Navigation\n"
            "Controls: Up/Down (drive), Left/Right (twist), Space (pause), R (reset)",
            position='upper_left',
            font_size=10,
            color='white'
        )
        plotter.add_axes()

        # 静态场景：血管 + 中心线
        centerline = self.navigator.centerline
        vessel = build_vessel_mesh(centerline, self.navigator.radius_model, self.config.vessel_samples)
        plotter.add_mesh(vessel, color='steelblue', opacity=0.15, smooth_shading=True)
        plotter.add_mesh(pv.lines_from_points(resample(centerline, 1.0, self.config.vessel_samples)),
                         color='royalblue', line_width=2)

        wire_actor = None
        tip_actor = None
        status_actor = None

        def update_scene():
            nonlocal wire_actor, tip_actor, status_actor

            # 清除上一帧的导丝
            if wire_actor is not None:
                plotter.remove_actor(wire_actor)
            if tip_actor is not None:
                plotter.remove_actor(tip_actor)
            if status_actor is not None:
                plotter.remove_actor(status_actor)

            state = self.navigator.state
            points = self.navigator.wire_path(self.config.wire_samples)
            wire_actor = plotter.add_mesh(
                build_wire_mesh(points, self.config.wire_radius),
                color='mediumspringgreen',
                smooth_shading=True
            )

            # 软头，颜色随扭转角变化
            tip = points[-1]
            shade = 0.5 + 0.5 * np.cos(state.twist)
            tip_actor = plotter.add_mesh(
                pv.Sphere(radius=self.config.wire_radius * 1.2, center=tip),
                color=(0.3, 0.95, 0.7 * shade + 0.3)
            )

            lines = [
                f"State: {state.run_state.value}",
                f"u = {state.progress:.3f}   clearance = {state.clearance:.2f}",
            ]
            if state.collision:
                lines.append(f"Contact - advance blocked (clearance {state.clearance:.2f})")
            if self.paused:
                lines.append("PAUSED")
            status_actor = plotter.add_text(
                "\n".join(lines),
                position='lower_left',
                font_size=10,
                color=STATE_COLORS[state.run_state]
            )

        def callback(*args):
            if not self.running:
                return
            self.navigator.step(self.next_input())
            update_scene()

        def quit_viewer():
            self.running = False
            plotter.close()

        plotter.add_key_event('Up', lambda: self.on_drive(1))
        plotter.add_key_event('Down', lambda: self.on_drive(-1))
        plotter.add_key_event('Left', lambda: self.on_twist(-1))
        plotter.add_key_event('Right', lambda: self.on_twist(1))
        plotter.add_key_event('space', self.toggle_pause)
        plotter.add_key_event('r', self.reset)
        plotter.add_key_event('Escape', quit_viewer)

        update_scene()

        # 相机看向血管中段
        mid = centerline[len(centerline) // 2]
        plotter.camera_position = [tuple(mid + np.array([60.0, 40.0, 0.0])), tuple(mid), (0, 0, 1)]

        plotter.add_callback(callback, interval=16)
        plotter.show()


def main(config=None):
    print("=" * 50)
    print("3D Guidewire Navigation Simulation (PyVista)")
    print("=" * 50)
    print("\nControls:")
    print("  Up/Down - Drive forward/back (press again to stop)")
    print("  Left/Right - Twist")
    print("  SPACE - Pause, R - Reset, ESC - Quit")
    print("\n" + "=" * 50)

    sim = GuidewireSimulation3D(config)
    sim.navigator.on_state_change(lambda s: print(f"State: {s.value}"))
    sim.run()


if __name__ == "__main__":
    main()

"""
Guidewire Navigation Simulation Demo
基于pygame的2D导丝推进仿真（中心线投影到 Z-X 平面）

安装依赖: pip install pygame numpy scipy
"""

import numpy as np
import pygame

from guidewire_navigation_demo.centerline import DEMO_CENTERLINES, load_centerline, resample
from guidewire_navigation_demo.config import SimulationConfig
from guidewire_navigation_demo.navigation import GuidewireNavigator, RunState, input_from_keys
from guidewire_navigation_demo.radius_model import radius_profile

# ============== 颜色定义 ==============
COLORS = {
    'background': (11, 16, 32),       # 深蓝色背景
    'vessel_wall': (14, 90, 134),     # 血管壁
    'vessel_fill': (20, 40, 70),      # 管腔
    'centerline': (110, 168, 254),    # 中心线
    'wire': (57, 224, 155),           # 导丝
    'wire_tip': (78, 243, 181),       # 软头
    'grid': (30, 41, 59),             # 网格线
    'text': (226, 232, 240),          # 文字
    'contact': (225, 29, 72),         # 接触提示
    'success': (5, 150, 105),         # 成功
    'paused': (251, 191, 36),         # 暂停
}


class VesselView:
    """把3D中心线投影到屏幕（水平=Z，竖直=X），并预计算血管壁"""

    def __init__(self, centerline, radius_model, width, height, margin=60, samples=160):
        self.centerline = centerline
        pts = resample(centerline, 1.0, samples)
        self.path_2d = pts[:, [2, 0]]

        # 适配窗口
        lo = self.path_2d.min(axis=0)
        hi = self.path_2d.max(axis=0)
        span = np.maximum(hi - lo, 1e-6)
        self.scale = min((width - 2 * margin) / span[0], (height - 2 * margin) / max(span[1], span[0] * 0.2))
        self.offset = np.array([margin, height / 2]) - np.array([lo[0], (lo[1] + hi[1]) / 2]) * self.scale

        # 管壁 = 中心线 ± 法向 × 有效半径
        _, radii = radius_profile(centerline, radius_model, samples)
        tangent = np.gradient(self.path_2d, axis=0)
        tangent = tangent / (np.linalg.norm(tangent, axis=1, keepdims=True) + 1e-6)
        normal = np.column_stack([-tangent[:, 1], tangent[:, 0]])
        self.wall_left = self.path_2d + normal * radii[:, None]
        self.wall_right = self.path_2d - normal * radii[:, None]

    def to_screen(self, points_2d):
        return points_2d * self.scale + self.offset

    def project(self, points_3d):
        """3D点 -> 屏幕坐标"""
        return self.to_screen(np.atleast_2d(points_3d)[:, [2, 0]])


class GuidewireSimulation:
    """导丝仿真主类"""

    def __init__(self, config=None, width=1000, height=600, radius_model=None):
        pygame.init()
        self.config = config or SimulationConfig()
        self.width = width
        self.height = height
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Guidewire Navigation Simulation")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 26)
        self.font_large = pygame.font.Font(None, 40)

        centerline = load_centerline(self.config.centerline, self.config.smooth_sigma)
        self.navigator = GuidewireNavigator(centerline, wire_radius=self.config.wire_radius,
                                            radius_model=radius_model)
        self.view = self._build_view()

        self.paused = False
        self.collisions = 0
        self.running = True

    def _build_view(self):
        return VesselView(self.navigator.centerline, self.navigator.radius_model,
                          self.width, self.height, samples=self.config.vessel_samples)

    def switch_centerline(self, name):
        """切换内置中心线（1: 直, 2: 弯）"""
        self.navigator.set_centerline(DEMO_CENTERLINES[name]())
        self.view = self._build_view()
        self.collisions = 0

    def reset(self):
        """重置仿真"""
        self.navigator.reset()
        self.collisions = 0

    def read_input(self):
        """根据当前按住的键生成一帧输入"""
        pressed = pygame.key.get_pressed()
        keys = self.config.keys

        def held(names):
            return any(pressed[pygame.key.key_code(name)] for name in names)

        return input_from_keys(
            advance=held(keys.advance),
            withdraw=held(keys.withdraw),
            twist_left=held(keys.twist_left),
            twist_right=held(keys.twist_right),
            paused=self.paused,
            forward_speed=self.config.forward_speed,
            twist_step=self.config.twist_step,
        )

    def draw_grid(self):
        """绘制背景网格"""
        for x in range(0, self.width, 50):
            pygame.draw.line(self.screen, COLORS['grid'], (x, 0), (x, self.height))
        for y in range(0, self.height, 50):
            pygame.draw.line(self.screen, COLORS['grid'], (0, y), (self.width, y))

    def draw_vessel(self):
        """绘制血管（管腔、管壁、中心线）"""
        left = self.view.to_screen(self.view.wall_left)
        right = self.view.to_screen(self.view.wall_right)
        outline = np.vstack([left, right[::-1]])
        pygame.draw.polygon(self.screen, COLORS['vessel_fill'], outline.tolist())
        pygame.draw.lines(self.screen, COLORS['vessel_wall'], False, left.tolist(), 3)
        pygame.draw.lines(self.screen, COLORS['vessel_wall'], False, right.tolist(), 3)

        center = self.view.to_screen(self.view.path_2d)
        pygame.draw.lines(self.screen, COLORS['centerline'], False, center.tolist(), 1)

    def draw_wire(self):
        """绘制导丝和软头（每帧按 u 重新生成）"""
        state = self.navigator.state
        pts = self.view.project(self.navigator.wire_path(self.config.wire_samples))
        thickness = max(2, int(2 * self.config.wire_radius * self.view.scale))
        pygame.draw.lines(self.screen, COLORS['wire'], False, pts.tolist(), thickness)

        tip = pts[-1]
        tip_radius = max(4, int(1.2 * self.config.wire_radius * self.view.scale))
        pygame.draw.circle(self.screen, COLORS['wire_tip'], tip.astype(int).tolist(), tip_radius)

        # 扭转标记
        marker = tip + tip_radius * np.array([np.cos(state.twist), np.sin(state.twist)])
        pygame.draw.line(self.screen, COLORS['background'], tip.tolist(), marker.tolist(), 2)

    def draw_ui(self):
        """绘制用户界面"""
        state = self.navigator.state
        title = self.font_large.render("Guidewire Navigation Demo", True, COLORS['text'])
        self.screen.blit(title, (10, 10))

        stats = [
            f"State: {state.run_state.value}",
            f"Progress u: {state.progress:.3f}",
            f"Clearance: {state.clearance:.2f}",
            f"Overpush: {state.overpush:.1f}",
            f"Contacts: {self.collisions}",
        ]
        for i, stat in enumerate(stats):
            text = self.font.render(stat, True, COLORS['text'])
            self.screen.blit(text, (10, 50 + i * 24))

        instructions = [
            "Controls:",
            "W/S or ↑/↓ - Advance/Withdraw",
            "Q/E - Twist",
            "P - Pause    R - Reset",
            "1/2 - Straight/Curved",
            "ESC - Quit",
        ]
        for i, inst in enumerate(instructions):
            text = self.font.render(inst, True, COLORS['text'])
            self.screen.blit(text, (self.width - 280, 10 + i * 24))

        # 接触提示
        if state.collision:
            toast = self.font.render(
                f"Contact - advance blocked (clearance {state.clearance:.2f})", True, (255, 255, 255))
            rect = toast.get_rect(topright=(self.width - 10, 170)).inflate(16, 10)
            pygame.draw.rect(self.screen, COLORS['contact'], rect, border_radius=5)
            self.screen.blit(toast, toast.get_rect(center=rect.center))

        if self.paused:
            text = self.font.render("PAUSED", True, COLORS['paused'])
            self.screen.blit(text, (10, 50 + len(stats) * 24))

        # Success / Fail 横幅
        banner = None
        if state.run_state is RunState.SUCCESS:
            banner = ("Success", COLORS['success'])
        elif state.run_state is RunState.FAIL:
            banner = ("Failed", COLORS['contact'])
        if banner:
            text = self.font_large.render(banner[0], True, (255, 255, 255))
            rect = text.get_rect(center=(self.width // 2, self.height - 40)).inflate(30, 14)
            pygame.draw.rect(self.screen, banner[1], rect, border_radius=6)
            self.screen.blit(text, text.get_rect(center=rect.center))

    def run(self):
        """主循环"""
        keys = self.config.keys
        while self.running:
            # 事件处理
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    name = pygame.key.name(event.key)
                    if name == keys.quit:
                        self.running = False
                    elif name == keys.pause:
                        self.paused = not self.paused
                    elif name == keys.reset:
                        self.reset()
                    elif name == "1":
                        self.switch_centerline("straight")
                    elif name == "2":
                        self.switch_centerline("curved")

            # 推进一帧
            was_blocked = self.navigator.state.collision
            state = self.navigator.step(self.read_input())
            if state.collision and not was_blocked:
                self.collisions += 1

            # 绘制
            self.screen.fill(COLORS['background'])
            self.draw_grid()
            self.draw_vessel()
            self.draw_wire()
            self.draw_ui()

            pygame.display.flip()
            self.clock.tick(self.config.fps)

        pygame.quit()


def main(config=None):
    print("=" * 50)
    print("Guidewire Navigation Simulation (pygame)")
    print("=" * 50)
    print("\nControls:")
    print("  W/S or Up/Down - Advance/Withdraw")
    print("  Q/E - Twist")
    print("  P - Pause, R - Reset, 1/2 - Straight/Curved, ESC - Quit")
    print("\n" + "=" * 50)

    sim = GuidewireSimulation(config)
    sim.navigator.on_state_change(lambda s: print(f"State: {s.value}"))
    sim.run()


if __name__ == "__main__":
    main()

"""
Guidewire Navigation - 导丝推进状态机
每帧根据输入推进/回撤导丝，按余量判断是否受阻，累计顶推压力并切换
Idle -> Navigating -> Success / Fail

tick() 是纯函数；GuidewireNavigator 持有状态，是唯一的写入者
"""

import enum
import logging
from dataclasses import dataclass

from guidewire_navigation_demo.centerline import as_centerline, resample
from guidewire_navigation_demo.radius_model import DEFAULT_RADIUS_MODEL

logger = logging.getLogger(__name__)

WIRE_RADIUS = 0.55
FORWARD_SPEED = 0.22
TWIST_STEP = 0.03


class RunState(enum.Enum):
    IDLE = "idle"
    NAVIGATING = "navigating"
    SUCCESS = "success"
    FAIL = "fail"


@dataclass(frozen=True)
class NavigationParams:
    """状态机的调参常数（与帧率无关）"""
    step_scale: float = 0.002          # 输入单位 -> 进度单位
    max_progress: float = 0.999
    success_threshold: float = 0.995
    overpush_limit: float = 60.0
    pressure_increment: float = 1.0    # 受阻一帧 +1
    pressure_decay: float = 0.5        # 未受阻一帧 -0.5


@dataclass(frozen=True)
class WireInput:
    du: float = 0.0
    twist_delta: float = 0.0
    paused: bool = False


@dataclass(frozen=True)
class NavigationState:
    progress: float = 0.0
    run_state: RunState = RunState.IDLE
    overpush: float = 0.0
    twist: float = 0.0
    collision: bool = False
    clearance: float = 0.0


def reset():
    """初始状态"""
    return NavigationState()


def input_from_keys(advance=False, withdraw=False, twist_left=False, twist_right=False,
                    paused=False, forward_speed=FORWARD_SPEED, twist_step=TWIST_STEP):
    """把当前按住的键转换为一帧输入"""
    du = 0.0
    twist_delta = 0.0
    if advance:
        du += forward_speed
    if withdraw:
        du -= forward_speed
    if twist_left:
        twist_delta -= twist_step
    if twist_right:
        twist_delta += twist_step
    return WireInput(du=du, twist_delta=twist_delta, paused=paused)


def tick(centerline, state, wire_input, wire_radius=WIRE_RADIUS, radius_model=None, params=None):
    """推进一帧，返回新的状态（不修改传入的状态）"""
    radius_model = radius_model or DEFAULT_RADIUS_MODEL
    params = params or NavigationParams()

    # 暂停只屏蔽输入，余量照常计算
    du = 0.0 if wire_input.paused else wire_input.du
    twist_delta = 0.0 if wire_input.paused else wire_input.twist_delta

    clearance = radius_model(centerline, state.progress) - wire_radius
    progress = state.progress
    run_state = state.run_state

    if du > 0 and clearance <= 0:
        # 受阻：位置不变，顶推压力累加
        collision = True
        overpush = state.overpush + params.pressure_increment
    else:
        collision = False
        overpush = max(0.0, state.overpush - params.pressure_decay)
        if du != 0:
            progress = min(max(progress + du * params.step_scale, 0.0), params.max_progress)
            if run_state is RunState.IDLE:
                run_state = RunState.NAVIGATING

    if overpush > params.overpush_limit and run_state is not RunState.SUCCESS:
        run_state = RunState.FAIL
    if progress > params.success_threshold and run_state is RunState.NAVIGATING:
        run_state = RunState.SUCCESS

    return NavigationState(
        progress=progress,
        run_state=run_state,
        overpush=overpush,
        twist=state.twist + twist_delta,
        collision=collision,
        clearance=clearance,
    )


def simulate(centerline, inputs, wire_radius=WIRE_RADIUS, radius_model=None, params=None, state=None):
    """从初始状态（或给定状态）依次执行一串输入，返回每帧的状态"""
    state = state or reset()
    history = []
    for wire_input in inputs:
        state = tick(centerline, state, wire_input, wire_radius, radius_model, params)
        history.append(state)
    return history


class GuidewireNavigator:
    """
    导丝导航器 - 持有当前状态，对外只暴露 step / reset

    渲染层只读取 state 快照并提交输入；进度或状态变化时通知监听者
    """

    def __init__(self, centerline, wire_radius=WIRE_RADIUS, radius_model=None, params=None):
        self.centerline = as_centerline(centerline)
        self.wire_radius = wire_radius
        self.radius_model = radius_model or DEFAULT_RADIUS_MODEL
        self.params = params or NavigationParams()
        self._state = reset()

        # 监听者
        self.progress_listeners = []
        self.state_listeners = []

    @property
    def state(self):
        return self._state

    def on_progress(self, callback):
        self.progress_listeners.append(callback)
        return callback

    def on_state_change(self, callback):
        self.state_listeners.append(callback)
        return callback

    def step(self, wire_input):
        """推进一帧"""
        new_state = tick(self.centerline, self._state, wire_input,
                         self.wire_radius, self.radius_model, self.params)
        if new_state.collision and not self._state.collision:
            logger.debug("Advance blocked at u=%.4f (clearance %.3f)",
                         new_state.progress, new_state.clearance)
        self._commit(new_state)
        return new_state

    def reset(self):
        """重置到 Idle，唯一能离开 Success / Fail 的方式"""
        self._commit(reset())
        return self._state

    def set_centerline(self, points):
        """切换血管模型，并重置"""
        self.centerline = as_centerline(points)
        logger.info("Centerline switched (%d points)", len(self.centerline))
        return self.reset()

    def wire_path(self, sample_count=80):
        """当前导丝形状：从起点到 u 的重采样折线"""
        return resample(self.centerline, self._state.progress, sample_count)

    def tip_position(self):
        return self.wire_path(2)[-1]

    def effective_radius(self, u=None):
        u = self._state.progress if u is None else u
        return self.radius_model(self.centerline, u)

    def _commit(self, new_state):
        old_state = self._state
        self._state = new_state

        if new_state.progress != old_state.progress:
            for callback in self.progress_listeners:
                callback(new_state.progress)
        if new_state.run_state is not old_state.run_state:
            logger.info("Run state %s -> %s at u=%.4f",
                        old_state.run_state.value, new_state.run_state.value, new_state.progress)
            for callback in self.state_listeners:
                callback(new_state.run_state)

"""
Game session: one run of a profile from start to game over.

The session owns the actor, the entity pools, the spawners and the run
counters. Hosts drive it with two calls:

    session.on_action(Action.JUMP)      # whenever input arrives
    events = session.step(raw_dt)       # once per frame

step() returns the events produced during the tick and also publishes
them on the event bus, where renderers, effects and storage listen.
Nothing inside the simulation draws, plays audio or touches storage
directly; the only storage access is reading the best score when a run
starts and writing it once when a run ends.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from sparkrun.core.clock import FrameClock
from sparkrun.core.events import Event, EventBus, GameEventType, state_event, tick_event
from sparkrun.core.state import SessionState, StateMachine
from sparkrun.profiles import GameProfile
from sparkrun.sim.actions import Action
from sparkrun.sim.collision import CollisionEngine
from sparkrun.sim.entities import Box, RunTally
from sparkrun.sim.physics import ActorPhysics
from sparkrun.sim.playfield import Playfield
from sparkrun.sim.pools import EntityPool
from sparkrun.sim.spawner import Spawner
from sparkrun.storage import MemoryStore, ScoreBoard
from sparkrun.storage.store import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityView:
    """Read-only copy of an entity for renderers."""

    kind: str
    category: str
    shape: str
    effect: str
    x: float
    y: float
    w: float
    h: float
    resolved: bool


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a renderer needs for one frame."""

    profile: str
    state: SessionState
    score: int
    best: int
    lives: int
    max_lives: int
    streak: int
    best_streak: int
    elapsed: float
    distance: float
    world_speed: float
    effective_speed: float
    speed_multiplier: float
    actor: Box
    actor_round: bool
    grounded: bool
    shield: bool
    invulnerable: float
    slow: float
    squash: float
    entities: tuple[EntityView, ...]
    width: float
    height: float
    floor_y: float
    scale: float
    muted: bool
    double_jump: bool


class GameSession:
    """Single-threaded simulation of one game profile."""

    def __init__(
        self,
        profile: GameProfile,
        width: float = 960,
        height: float = 540,
        scale: float = 1.0,
        store: Optional[KeyValueStore] = None,
        bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.profile = profile
        self.bus = bus
        self.rng = rng if rng is not None else random.Random(seed)
        self.playfield = Playfield.for_profile(profile, width, height, scale)
        self.clock = FrameClock(profile.max_step)
        self.machine = StateMachine()
        self.scoreboard = ScoreBoard(store if store is not None else MemoryStore(), profile.best_key)

        self.physics = ActorPhysics(profile, self.playfield)
        self.collisions = CollisionEngine(profile)
        self.pools: dict[str, EntityPool] = {}
        self.spawners: list[Spawner] = []
        self._build_spawners()

        self.tally = RunTally(lives=profile.lives)
        self.elapsed = 0.0
        self.frame = 0
        self.world_speed = self._start_speed

        self.muted = self.scoreboard.get_flag(profile.mute_key)
        self.double_jump = self.scoreboard.get_flag(profile.double_jump_key, profile.double_jump_default)

        logger.info(f"Session created for profile '{profile.name}' ({width}x{height} @ {scale}x)")

    def _build_spawners(self) -> None:
        profile = self.profile
        for channel in profile.channels:
            pool = self._make_pool()
            self.pools[channel.name] = pool
            bonus_pool = None
            if channel.carries_bonus and profile.bonus is not None:
                bonus_pool = self.pools.setdefault("bonus", self._make_pool())
            self.spawners.append(Spawner(channel, pool, self.rng, profile.bonus, bonus_pool))

    def _make_pool(self) -> EntityPool:
        profile = self.profile
        return EntityPool(
            self.playfield,
            self.rng,
            spawn_margin=profile.spawn_margin,
            prune_margin=profile.prune_margin,
            edge_padding=profile.edge_padding,
        )

    # Read-only state

    @property
    def state(self) -> SessionState:
        return self.machine.state

    @property
    def actor(self):
        return self.physics.actor

    @property
    def score(self) -> int:
        return self.tally.score

    @property
    def lives(self) -> int:
        return self.tally.lives

    @property
    def best(self) -> int:
        return self.scoreboard.best

    @property
    def entities(self) -> list:
        return [entity for pool in self.pools.values() for entity in pool]

    @property
    def _start_speed(self) -> float:
        return self.profile.start_speed * self.playfield.scale

    @property
    def effective_speed(self) -> float:
        if self.tally.slow > 0:
            return self.world_speed * self.profile.slow_factor
        return self.world_speed

    @property
    def speed_multiplier(self) -> float:
        start = self._start_speed
        return self.world_speed / start if start > 0 else 1.0

    # Lifecycle

    def reset(self) -> None:
        """Reset run counters, entities, timers and the actor."""
        self.tally = RunTally(lives=self.profile.lives)
        self.elapsed = 0.0
        self.frame = 0
        self.world_speed = self._start_speed
        for pool in self.pools.values():
            pool.clear()
        for spawner in self.spawners:
            spawner.reset()
        self.physics.reset()
        self.clock.reset()

    def start(self) -> list[Event]:
        """Start a run from IDLE or ENDED. Ignored otherwise."""
        if self.state not in (SessionState.IDLE, SessionState.ENDED):
            logger.debug(f"start() ignored in {self.state.name}")
            return []
        self.reset()
        self.scoreboard.refresh()
        events = self._transition(SessionState.RUNNING)
        logger.info(f"Run started ({self.profile.name}), best {self.best}")
        return self._publish(events)

    def restart(self) -> list[Event]:
        """Reset and start again from any state."""
        events = []
        if self.state in (SessionState.RUNNING, SessionState.PAUSED):
            events += self._transition(SessionState.IDLE)
        self._publish(events)
        return events + self.start()

    def pause(self) -> list[Event]:
        if self.state != SessionState.RUNNING:
            return []
        return self._publish(self._transition(SessionState.PAUSED))

    def resume(self) -> list[Event]:
        if self.state != SessionState.PAUSED:
            return []
        self.clock.reset()
        return self._publish(self._transition(SessionState.RUNNING))

    def toggle_pause(self) -> list[Event]:
        if self.state == SessionState.PAUSED:
            return self.resume()
        return self.pause()

    def back_to_menu(self) -> list[Event]:
        """Abandon the run and return to IDLE without recording it."""
        if self.state == SessionState.IDLE:
            return []
        events = self._transition(SessionState.IDLE)
        self.reset()
        return self._publish(events)

    def end(self) -> list[Event]:
        """Force the run to end, e.g. when the host gives up on it."""
        return self._publish(self._end())

    def _end(self) -> list[Event]:
        """Finish the run. Only the first call per run has any effect."""
        if self.state not in (SessionState.RUNNING, SessionState.PAUSED):
            return []
        events = self._transition(SessionState.ENDED)
        score = self.tally.score
        previous = self.scoreboard.best
        new_best = self.scoreboard.record(score)
        events.append(Event(
            GameEventType.GAME_OVER,
            data={
                "score": score,
                "best": self.scoreboard.best,
                "distance": self.tally.distance,
                "best_streak": self.tally.best_streak,
                "speed": self.world_speed / self.playfield.scale,
                "elapsed": self.elapsed,
            },
        ))
        if new_best:
            events.append(Event(GameEventType.NEW_BEST, data={"score": score, "previous": previous}))
        logger.info(f"Run over: score {score}, best {self.scoreboard.best}")
        return events

    def _transition(self, to_state: SessionState) -> list[Event]:
        old = self.state
        if not self.machine.transition(to_state):
            return []
        return [state_event(old.name, to_state.name)]

    # Input

    def on_action(self, action: Action, pressed: bool = True) -> list[Event]:
        """Handle an input action. Actions invalid for the state are ignored."""
        if action.is_move:
            self.physics.set_moving(action, pressed)
            return []
        if not pressed:
            return []

        if action is Action.JUMP:
            return self._jump()
        if action is Action.START:
            return self.start()
        if action is Action.RESTART:
            return self.restart()
        if action is Action.PAUSE:
            return self.toggle_pause()
        if action is Action.MENU:
            return self.back_to_menu()
        if action is Action.TOGGLE_MUTE:
            self.muted = not self.muted
            self.scoreboard.set_flag(self.profile.mute_key, self.muted)
            return self._publish([Event(GameEventType.PREFERENCE_CHANGED, data={"muted": self.muted})])
        if action is Action.TOGGLE_DOUBLE_JUMP:
            self.double_jump = not self.double_jump
            self.scoreboard.set_flag(self.profile.double_jump_key, self.double_jump)
            return self._publish([Event(GameEventType.PREFERENCE_CHANGED, data={"double_jump": self.double_jump})])
        if action is Action.RESET_BEST:
            self.scoreboard.reset_best()
            return self._publish([Event(GameEventType.PREFERENCE_CHANGED, data={"best": 0})])
        return []

    def _jump(self) -> list[Event]:
        events: list[Event] = []
        if self.state == SessionState.IDLE and self.profile.jump_starts_run:
            events += self.start()
        if self.state != SessionState.RUNNING:
            logger.debug(f"jump ignored in {self.state.name}")
            return events
        event = self.physics.apply_action(Action.JUMP, self.double_jump)
        if event is not None:
            events += self._publish([event])
        return events

    def resize(self, width: float, height: float, scale: float = 1.0) -> list[Event]:
        """Apply a new surface size without resetting the run."""
        old_scale = self.playfield.scale
        if not self.playfield.resize(width, height, scale):
            logger.warning(f"Ignoring degenerate resize {width}x{height} @ {scale}")
            return []

        # Speeds and sizes are in device pixels
        ratio = scale / old_scale
        if ratio != 1.0:
            self.world_speed = min(
                self.profile.max_speed * scale,
                max(self._start_speed, self.world_speed * ratio),
            )
            logger.debug(f"Scale changed {old_scale} -> {scale}, world speed {self.world_speed:.1f}")
        self.physics.on_resize(ratio)
        for pool in self.pools.values():
            pool.on_resize(ratio)
        return self._publish([Event(
            GameEventType.RESIZED,
            data={"width": width, "height": height, "scale": scale, "floor_y": self.playfield.floor_y},
        )])

    # Simulation

    def step(self, raw_dt: float) -> list[Event]:
        """Run one tick. Does nothing unless the session is RUNNING."""
        dt = self.clock.tick(raw_dt)
        if not self.machine.is_simulating:
            return []

        tally = self.tally
        if tally.hit_stop > 0:
            tally.hit_stop = max(0.0, tally.hit_stop - dt)
            return []

        self.frame += 1
        events = self._advance(dt)
        events.append(tick_event(dt, self.frame))
        return self._publish(events)

    def _advance(self, dt: float) -> list[Event]:
        profile = self.profile
        tally = self.tally
        scale = self.playfield.scale
        events: list[Event] = []

        self.elapsed += dt
        if tally.slow > 0:
            tally.slow = max(0.0, tally.slow - dt)

        self.world_speed = min(profile.max_speed * scale, self.world_speed + profile.speed_ramp * scale * dt)
        speed = self.effective_speed

        if profile.tracks_distance:
            tally.distance += speed / self._start_speed * dt * 10
        if profile.score_rate:
            rate = profile.score_rate
            if profile.score_scales_with_speed:
                rate *= self.speed_multiplier
            tally.add_score(rate * dt)

        for spawner in self.spawners:
            events += spawner.update(dt, self.elapsed)

        events += self.physics.integrate(dt)
        actor = self.actor
        if actor.invulnerable > 0:
            actor.invulnerable = max(0.0, actor.invulnerable - dt)

        pools = list(self.pools.values())
        for pool in pools:
            pool.advance(dt, speed)

        events += self.collisions.check_passes(actor, pools, tally)
        contact = self.collisions.check_all(actor, pools, tally)
        for event in contact:
            if event.type == GameEventType.HIT:
                self.physics.knock_back()
        events += contact

        for pool in pools:
            pool.prune()

        if tally.lives <= 0:
            events += self._end()
        return events

    def _publish(self, events: list[Event]) -> list[Event]:
        if self.bus is not None and events:
            self.bus.emit_all(events)
        return events

    def snapshot(self) -> SessionSnapshot:
        """Freeze the current state for rendering."""
        actor = self.actor
        tally = self.tally
        return SessionSnapshot(
            profile=self.profile.name,
            state=self.state,
            score=tally.score,
            best=max(self.scoreboard.best, tally.score),
            lives=tally.lives,
            max_lives=self.profile.lives_cap or self.profile.lives,
            streak=tally.streak,
            best_streak=tally.best_streak,
            elapsed=self.elapsed,
            distance=tally.distance,
            world_speed=self.world_speed,
            effective_speed=self.effective_speed,
            speed_multiplier=self.speed_multiplier,
            actor=actor.box(),
            actor_round=self.physics.free,
            grounded=actor.grounded,
            shield=actor.shield,
            invulnerable=actor.invulnerable,
            slow=tally.slow,
            squash=actor.squash,
            entities=tuple(
                EntityView(
                    kind=e.kind,
                    category=e.category,
                    shape=e.spec.shape,
                    effect=e.spec.effect,
                    x=e.x,
                    y=e.y,
                    w=e.w,
                    h=e.h,
                    resolved=e.resolved,
                )
                for e in self.entities
            ),
            width=self.playfield.width,
            height=self.playfield.height,
            floor_y=self.playfield.floor_y,
            scale=self.playfield.scale,
            muted=self.muted,
            double_jump=self.double_jump,
        )

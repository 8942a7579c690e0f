"""
Game tuning profiles.

A profile fully describes one game: actor physics, world speed ramp,
scoring, lives and the kinds of entities its spawners produce. The
built-in profiles cover three games:

    rush       Obstacle-jump runner, a single hit ends the run
    spark      Runner with lives, double jump, shield and slow power-ups
    orbs       Top-down dodger collecting orbs between meteors
    orbs_hard  Faster orbs variant worth double points
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

Category = Literal["obstacle", "hazard", "collectible"]
Placement = Literal["ground", "air", "band"]
Effect = Literal["none", "shield", "slow"]
Shape = Literal["rect", "circle"]


class KindSpec(BaseModel):
    """One kind of spawnable entity."""

    name: str
    category: Category = "obstacle"
    width: tuple[int, int] = Field(default=(32, 32))
    height: tuple[int, int] = Field(default=(32, 32))
    placement: Placement = "ground"
    weight: float = Field(default=1.0, gt=0.0)
    score: int = Field(default=0, ge=0)
    effect: Effect = "none"
    shape: Shape = "rect"
    speed_scale: float = Field(default=1.0, gt=0.0)
    # Removed from the pool on contact instead of lingering on screen
    consumed_on_contact: bool = False

    @model_validator(mode="after")
    def _check_ranges(self) -> "KindSpec":
        for label, (low, high) in (("width", self.width), ("height", self.height)):
            if low <= 0 or high < low:
                raise ValueError(f"{self.name}: invalid {label} range {low}..{high}")
        return self

    @property
    def is_harmful(self) -> bool:
        return self.category in ("obstacle", "hazard")


class SpawnChannel(BaseModel):
    """An independent spawn countdown producing one of its kinds."""

    name: str
    kinds: list[KindSpec] = Field(min_length=1)
    interval_min: float = Field(gt=0.0)
    interval_max: float = Field(gt=0.0)
    # Interval is divided by (1 + interval_decay * elapsed)
    interval_decay: float = Field(default=0.0, ge=0.0)
    interval_floor: float = Field(default=0.05, gt=0.0)
    first_delay: Optional[float] = Field(default=None, ge=0.0)
    # Minimum distance the previous spawn must travel before the next one
    safe_gap: float = Field(default=0.0, ge=0.0)
    retry_delay: float = Field(default=0.12, gt=0.0)
    carries_bonus: bool = False

    @model_validator(mode="after")
    def _check_interval(self) -> "SpawnChannel":
        if self.interval_max < self.interval_min:
            raise ValueError(f"{self.name}: interval_max < interval_min")
        return self


class BonusSpec(BaseModel):
    """Power-up placed ahead of a freshly spawned obstacle."""

    kinds: list[KindSpec] = Field(min_length=1)
    chance: float = Field(default=0.16, ge=0.0, le=1.0)
    min_interval: float = Field(default=6.5, ge=0.0)
    offset: tuple[float, float] = (120.0, 220.0)
    lift: float = 70.0          # height above the floor
    band_top: float = 0.35      # highest reachable y, fraction of height
    floor_clearance: float = 22.0


class GameProfile(BaseModel):
    """Complete tuning for one game."""

    name: str
    display_name: str = ""
    mode: Literal["platform", "free"] = "platform"

    # Clock
    max_step: float = Field(default=0.033, gt=0.0)

    # Playfield layout (fractions of the surface)
    floor_line: float = Field(default=0.865, gt=0.0, le=1.0)
    anchor_x: float = Field(default=0.22, ge=0.0, le=1.0)
    anchor_y: float = Field(default=0.5, ge=0.0, le=1.0)
    air_band: tuple[float, float] = (0.48, 0.66)
    spawn_margin: float = Field(default=40.0, ge=0.0)
    prune_margin: float = Field(default=50.0, ge=0.0)
    edge_padding: float = Field(default=40.0, ge=0.0)

    # Actor
    actor_size: tuple[int, int] = (46, 56)
    gravity: float = Field(default=2600.0, ge=0.0)
    jump_impulse: float = Field(default=980.0, ge=0.0)
    double_jump_impulse: float = Field(default=900.0, ge=0.0)
    double_jump_default: bool = False
    move_speed: float = Field(default=240.0, ge=0.0)
    jump_starts_run: bool = False

    # World speed
    start_speed: float = Field(default=520.0, ge=0.0)
    speed_ramp: float = Field(default=14.0, ge=0.0)
    max_speed: float = Field(default=1600.0, ge=0.0)

    # Scoring
    score_rate: float = Field(default=60.0, ge=0.0)
    score_scales_with_speed: bool = False
    pass_bonus: Optional[int] = None  # None: use the kind's score
    streak_bonus: int = Field(default=0, ge=0)
    streak_cap: int = Field(default=0, ge=0)
    tracks_distance: bool = False

    # Lives
    lives: int = Field(default=3, ge=1)
    lives_cap: Optional[int] = None
    pickup_restores: int = Field(default=0, ge=0)
    invulnerable_time: float = Field(default=1.1, ge=0.0)
    shield_invulnerable_time: float = Field(default=0.55, ge=0.0)
    hit_stop: float = Field(default=0.06, ge=0.0)
    shield_hit_stop: float = Field(default=0.033, ge=0.0)
    knockback: float = Field(default=0.0, ge=0.0)

    # Power-ups
    shield_score: int = Field(default=120, ge=0)
    slow_score: int = Field(default=90, ge=0)
    slow_duration: float = Field(default=3.2, ge=0.0)
    slow_factor: float = Field(default=0.55, gt=0.0, le=1.0)

    # Spawning
    channels: list[SpawnChannel] = Field(min_length=1)
    bonus: Optional[BonusSpec] = None

    # Persistence keys
    best_key: str = "best"
    mute_key: Optional[str] = None
    double_jump_key: Optional[str] = None

    @model_validator(mode="after")
    def _check_speeds(self) -> "GameProfile":
        if self.max_speed < self.start_speed:
            raise ValueError("max_speed must be >= start_speed")
        if self.lives_cap is not None and self.lives_cap < self.lives:
            raise ValueError("lives_cap must be >= lives")
        return self

    def kind(self, name: str) -> KindSpec:
        """Look up a kind by name across channels and bonus."""
        for channel in self.channels:
            for spec in channel.kinds:
                if spec.name == name:
                    return spec
        if self.bonus:
            for spec in self.bonus.kinds:
                if spec.name == name:
                    return spec
        raise KeyError(name)


RUSH = GameProfile(
    name="rush",
    display_name="RUN RUSH",
    max_step=0.033,
    floor_line=0.9,
    anchor_x=0.146,
    actor_size=(44, 64),
    gravity=2400.0,
    jump_impulse=920.0,
    jump_starts_run=True,
    start_speed=360.0,
    speed_ramp=21.6,
    max_speed=1800.0,
    score_rate=20.0,
    score_scales_with_speed=True,
    pass_bonus=12,
    lives=1,
    invulnerable_time=0.0,
    hit_stop=0.0,
    prune_margin=0.0,
    channels=[
        SpawnChannel(
            name="obstacles",
            interval_min=0.75,
            interval_max=1.60,
            interval_decay=0.03,
            kinds=[
                KindSpec(name="box", width=(26, 50), height=(34, 78), weight=72),
                KindSpec(name="bar", width=(56, 92), height=(22, 40), weight=28),
            ],
        ),
    ],
    best_key="RR_best",
)

SPARK = GameProfile(
    name="spark",
    display_name="RUN SPARK",
    max_step=1 / 24,
    actor_size=(46, 56),
    gravity=2600.0,
    jump_impulse=980.0,
    double_jump_impulse=900.0,
    start_speed=520.0,
    speed_ramp=14.0,
    max_speed=1600.0,
    score_rate=60.0,
    tracks_distance=True,
    lives=3,
    invulnerable_time=1.1,
    knockback=420.0,
    channels=[
        SpawnChannel(
            name="obstacles",
            interval_min=0.55,
            interval_max=1.25,
            first_delay=0.9,
            safe_gap=90.0,
            carries_bonus=True,
            kinds=[
                KindSpec(name="spike", width=(34, 34), height=(40, 40), weight=55, score=25),
                KindSpec(name="wall", width=(40, 40), height=(74, 74), weight=30, score=35),
                KindSpec(name="drone", width=(42, 42), height=(32, 32), weight=15,
                         score=45, placement="air"),
            ],
        ),
    ],
    bonus=BonusSpec(
        kinds=[
            KindSpec(name="shield", category="collectible", width=(30, 30),
                     height=(30, 30), weight=55, effect="shield", shape="circle"),
            KindSpec(name="slow", category="collectible", width=(30, 30),
                     height=(30, 30), weight=45, effect="slow", shape="circle"),
        ],
    ),
    best_key="RS_hiScore_v1",
    mute_key="RS_mute_v1",
    double_jump_key="RS_doubleJump_v1",
)


def _orbs(hard: bool) -> GameProfile:
    speed = 240.0 if hard else 180.0
    return GameProfile(
        name="orbs_hard" if hard else "orbs",
        display_name="SPARK ORBS" + (" HARD" if hard else ""),
        mode="free",
        max_step=0.05,
        anchor_x=0.104,
        anchor_y=0.5,
        actor_size=(56, 56),
        gravity=0.0,
        move_speed=336.0 if hard else 240.0,
        start_speed=speed,
        speed_ramp=0.0,
        max_speed=speed,
        score_rate=0.0,
        streak_bonus=5,
        streak_cap=5,
        lives=3,
        lives_cap=8,
        pickup_restores=1,
        invulnerable_time=0.0,
        hit_stop=0.0,
        spawn_margin=20.0,
        prune_margin=50.0,
        edge_padding=40.0,
        channels=[
            SpawnChannel(
                name="orbs",
                interval_min=1.5,
                interval_max=1.5,
                kinds=[
                    KindSpec(name="orb", category="collectible", width=(24, 24),
                             height=(24, 24), placement="band", shape="circle",
                             score=30 if hard else 15),
                ],
            ),
            SpawnChannel(
                name="meteors",
                interval_min=85 / 60 if hard else 2.0,
                interval_max=85 / 60 if hard else 2.0,
                kinds=[
                    KindSpec(name="meteor", category="hazard", width=(44, 80),
                             height=(44, 80), placement="band", shape="circle",
                             speed_scale=1.25 if hard else 3.5 / 3.0,
                             consumed_on_contact=True),
                ],
            ),
        ],
        best_key="SO_best" + ("_hard" if hard else ""),
    )


ORBS = _orbs(hard=False)
ORBS_HARD = _orbs(hard=True)

PROFILES: dict[str, GameProfile] = {
    profile.name: profile for profile in (RUSH, SPARK, ORBS, ORBS_HARD)
}


def get_profile(name: str) -> GameProfile:
    """Get a built-in profile by name. Raises KeyError for unknown names."""
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(f"Unknown profile '{name}', expected one of {sorted(PROFILES)}")

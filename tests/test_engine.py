import numpy as np
import pytest

from boids import FlockConfig, FlockEngine, StepConstants


def _scenario_config() -> FlockConfig:
    return FlockConfig(
        vision_radius=160.0,
        separation_distance=100.0,
        separation_rate=0.002,
        cohesion_rate=0.00005,
        alignment_rate=0.01,
        boundary_extent=(600.0, 400.0, 600.0),
        boundary_threshold=0.3,
        boundary_rate=0.00003,
        speed_min=0.15,
        speed_max=0.35,
    )


def test_step_constants_scale_rates_by_dt():
    config = _scenario_config()
    k = StepConstants.derive(config, 20.0)

    assert k.cohesion_force == pytest.approx(0.001)
    assert k.boundary_force == pytest.approx(0.0006)
    assert k.min_speed == pytest.approx(3.0)
    assert k.max_speed == pytest.approx(7.0)
    np.testing.assert_allclose(k.soft_wall, [420.0, 280.0, 420.0])


def test_lone_boid_gets_no_cohesion_or_alignment(make_flock):
    config = _scenario_config()
    flock = make_flock(config, [[10.0, -20.0, 30.0]], [[1.0, 2.0, 3.0]])

    deltas = FlockEngine().steering(flock, config, 20.0)

    np.testing.assert_array_equal(deltas, np.zeros((1, 3)))


def test_boids_out_of_sight_are_isolated(make_flock):
    config = _scenario_config()
    flock = make_flock(
        config,
        [[-300.0, 0.0, 0.0], [300.0, 0.0, 0.0]],
        [[1.0, 0.0, 0.0], [0.0, -1.0, 0.5]],
    )

    deltas = FlockEngine().steering(flock, config, 20.0)

    np.testing.assert_array_equal(deltas, np.zeros((2, 3)))


def test_speed_clamp_leaves_max_speed_velocity_unchanged(make_flock, quiet_config):
    quiet_config.speed_min = 0.15
    quiet_config.speed_max = 0.35
    dt = 20.0
    max_speed = StepConstants.derive(quiet_config, dt).max_speed
    flock = make_flock(quiet_config, [[0.0, 0.0, 0.0]], [[max_speed, 0.0, 0.0]])

    FlockEngine().step(flock, quiet_config, dt)

    np.testing.assert_array_equal(flock.velocities[0], [max_speed, 0.0, 0.0])
    assert flock.speeds[0] == max_speed


def test_speed_clamp_scales_fast_boid_down(make_flock, quiet_config):
    quiet_config.speed_max = 0.35
    flock = make_flock(quiet_config, [[0.0, 0.0, 0.0]], [[30.0, 40.0, 0.0]])

    FlockEngine().step(flock, quiet_config, 20.0)

    np.testing.assert_allclose(flock.velocities[0], [4.2, 5.6, 0.0])
    assert flock.speeds[0] == pytest.approx(7.0)
    np.testing.assert_allclose(flock.positions[0], [4.2, 5.6, 0.0])


def test_speed_clamp_scales_slow_boid_up(make_flock, quiet_config):
    quiet_config.speed_min = 0.15
    flock = make_flock(quiet_config, [[0.0, 0.0, 0.0]], [[0.0, 0.3, 0.4]])

    FlockEngine().step(flock, quiet_config, 20.0)

    np.testing.assert_allclose(flock.velocities[0], [0.0, 1.8, 2.4])
    assert flock.speeds[0] == pytest.approx(3.0)


def test_stationary_boid_stays_finite_at_min_speed(make_flock, quiet_config):
    quiet_config.speed_min = 0.15
    flock = make_flock(quiet_config, [[0.0, 0.0, 0.0]], [[0.0, 0.0, 0.0]])

    FlockEngine().step(flock, quiet_config, 20.0)

    assert np.all(np.isfinite(flock.velocities))
    assert np.all(np.isfinite(flock.positions))
    assert flock.speeds[0] == pytest.approx(3.0)


@pytest.mark.parametrize("k", [5.0, 10.0, 40.0])
def test_boundary_pushes_inward_on_both_sides(make_flock, k):
    config = _scenario_config()
    dt = 20.0
    wall = config.soft_wall[0]
    flock = make_flock(
        config,
        [[wall + k, 0.0, 0.0], [-wall - k, 0.0, 0.0]],
        [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],
        speeds=[1.0, 1.0],
    )
    # Far apart: only the wall acts
    flock.positions[1, 2] = 400.0

    deltas = FlockEngine().steering(flock, config, dt)
    boundary_force = config.boundary_rate * dt

    assert deltas[0, 0] < 0.0
    assert deltas[1, 0] > 0.0
    assert deltas[0, 0] == pytest.approx(-k * boundary_force)
    assert deltas[1, 0] == pytest.approx(k * boundary_force)
    assert deltas[0, 1] == 0.0
    assert deltas[1, 1] == 0.0


def test_boundary_push_scales_with_cached_speed(make_flock):
    config = _scenario_config()
    wall = config.soft_wall[1]
    flock = make_flock(
        config,
        [[-400.0, wall + 10.0, 0.0], [400.0, wall + 10.0, 0.0]],
        [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],
        speeds=[1.0, 3.0],
    )

    deltas = FlockEngine().steering(flock, config, 20.0)

    assert deltas[1, 1] == pytest.approx(3.0 * deltas[0, 1])


@pytest.mark.parametrize("radius, rate, gain", [
    ("separation_distance", "separation_rate", 0.01),
    ("vision_radius", "cohesion_rate", 0.001),
])
@pytest.mark.parametrize("gap, steered", [(50.0, False), (49.0, True)])
def test_neighbor_radii_are_exclusive(make_flock, quiet_config, radius, rate, gain, gap, steered):
    quiet_config.separation_distance = 0.0
    quiet_config.vision_radius = 0.0
    setattr(quiet_config, radius, 50.0)
    setattr(quiet_config, rate, gain)
    flock = make_flock(quiet_config, [[0.0, 0.0, 0.0], [gap, 0.0, 0.0]], np.zeros((2, 3)))

    deltas = FlockEngine().steering(flock, quiet_config, 20.0)

    assert np.any(deltas != 0.0) == steered


def test_boundary_pushes_inward_on_z_axis(make_flock):
    config = _scenario_config()
    dt = 20.0
    wall = config.soft_wall[2]
    flock = make_flock(
        config,
        [[-400.0, 0.0, wall + 10.0], [400.0, 0.0, -wall - 10.0]],
        np.zeros((2, 3)),
        speeds=[1.0, 1.0],
    )

    deltas = FlockEngine().steering(flock, config, dt)
    boundary_force = config.boundary_rate * dt

    assert deltas[0, 2] == pytest.approx(-10.0 * boundary_force)
    assert deltas[1, 2] == pytest.approx(10.0 * boundary_force)
    np.testing.assert_array_equal(deltas[:, :2], np.zeros((2, 2)))


def test_engine_compiles_kernels_up_front():
    from boids.engine import compute_velocity_deltas, integrate_numba

    FlockEngine()

    assert compute_velocity_deltas.signatures
    assert integrate_numba.signatures


def test_separation_pushes_close_boids_apart(make_flock, quiet_config):
    quiet_config.vision_radius = 0.0
    quiet_config.separation_distance = 100.0
    quiet_config.separation_rate = 0.002
    flock = make_flock(
        quiet_config,
        [[0.0, 0.0, 0.0], [50.0, 0.0, 0.0]],
        [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],
    )
    before = np.linalg.norm(flock.positions[1] - flock.positions[0])

    FlockEngine().step(flock, quiet_config, 20.0)

    after = np.linalg.norm(flock.positions[1] - flock.positions[0])
    assert after > before
    np.testing.assert_allclose(flock.positions[0], [-0.1, 0.0, 0.0])
    np.testing.assert_allclose(flock.positions[1], [50.1, 0.0, 0.0])


def test_separation_is_flat_inside_threshold(make_flock, quiet_config):
    quiet_config.vision_radius = 0.0
    quiet_config.separation_distance = 100.0
    quiet_config.separation_rate = 0.01
    flock = make_flock(
        quiet_config,
        [[0.0, 0.0, 0.0], [20.0, 0.0, 0.0], [-300.0, 0.0, 0.0], [-220.0, 0.0, 0.0]],
        np.zeros((4, 3)),
    )

    deltas = FlockEngine().steering(flock, quiet_config, 20.0)

    # Push grows with offset, not with closeness
    assert deltas[0, 0] == pytest.approx(-0.2)
    assert deltas[2, 0] == pytest.approx(-0.8)


def test_alignment_is_not_time_scaled(make_flock, quiet_config):
    quiet_config.alignment_rate = 0.01
    quiet_config.vision_radius = 160.0
    flock = make_flock(
        quiet_config,
        [[0.0, 0.0, 0.0], [50.0, 0.0, 0.0]],
        [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
    )
    engine = FlockEngine()

    short = engine.steering(flock, quiet_config, 10.0)
    long = engine.steering(flock, quiet_config, 40.0)

    np.testing.assert_array_equal(short, long)
    np.testing.assert_allclose(short[0], [-0.01, 0.01, 0.0])


def test_cohesion_is_time_scaled(make_flock, quiet_config):
    quiet_config.cohesion_rate = 0.00005
    quiet_config.vision_radius = 160.0
    flock = make_flock(
        quiet_config,
        [[0.0, 0.0, 0.0], [100.0, 0.0, 0.0]],
        np.zeros((2, 3)),
    )
    engine = FlockEngine()

    short = engine.steering(flock, quiet_config, 10.0)
    long = engine.steering(flock, quiet_config, 20.0)

    np.testing.assert_allclose(long, 2.0 * short)
    assert short[0, 0] == pytest.approx(100.0 * 0.00005 * 10.0)


def test_scenario_speeds_clamped_and_separation_dominates(make_flock):
    config = _scenario_config()
    dt = 20.0
    flock = make_flock(
        config,
        [[0.0, 0.0, 0.0], [50.0, 0.0, 0.0]],
        [[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]],
    )
    engine = FlockEngine()

    deltas = engine.steering(flock, config, dt)
    assert deltas[0, 0] < 0.0
    assert deltas[1, 0] > 0.0
    assert deltas[0, 0] == pytest.approx(-0.07)

    engine.step(flock, config, dt)

    for i in range(2):
        assert 3.0 - 1e-9 <= flock.speeds[i] <= 7.0 + 1e-9
        assert np.linalg.norm(flock.velocities[i]) == pytest.approx(flock.speeds[i])


def test_step_reads_pre_step_state_regardless_of_order(make_flock):
    config = _scenario_config()
    rng = np.random.default_rng(11)
    positions = rng.uniform(-150.0, 150.0, (12, 3))
    velocities = rng.uniform(-2.0, 2.0, (12, 3))
    speeds = np.linalg.norm(velocities, axis=1)
    order = rng.permutation(12)

    forward = make_flock(config, positions, velocities, speeds)
    shuffled = make_flock(config, positions[order], velocities[order], speeds[order])

    engine = FlockEngine()
    engine.step(forward, config, 20.0)
    engine.step(shuffled, config, 20.0)

    np.testing.assert_allclose(shuffled.positions, forward.positions[order], rtol=1e-12, atol=1e-9)
    np.testing.assert_allclose(shuffled.velocities, forward.velocities[order], rtol=1e-12, atol=1e-9)


def test_step_on_empty_flock_is_noop(make_flock):
    config = _scenario_config()
    flock = make_flock(config, np.zeros((0, 3)), np.zeros((0, 3)), speeds=[])

    FlockEngine().step(flock, config, 20.0)

    assert flock.num_boids == 0
    assert FlockEngine().steering(flock, config, 20.0).shape == (0, 3)


def test_config_edits_apply_on_next_step(make_flock, quiet_config):
    flock = make_flock(quiet_config, [[0.0, 0.0, 0.0]], [[1.0, 0.0, 0.0]])
    engine = FlockEngine()

    engine.step(flock, quiet_config, 10.0)
    assert flock.speeds[0] == pytest.approx(1.0)

    quiet_config.speed_max = 0.05
    engine.step(flock, quiet_config, 10.0)
    assert flock.speeds[0] == pytest.approx(0.5)


def test_engine_does_not_mutate_config(make_flock):
    config = _scenario_config()
    before = config.to_dict()
    flock = make_flock(
        config,
        [[500.0, 0.0, 0.0], [450.0, 10.0, 0.0]],
        [[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]],
    )

    FlockEngine().step(flock, config, 20.0)

    assert config.to_dict() == before

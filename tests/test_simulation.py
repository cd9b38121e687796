"""Tests for the simulation controller."""

import pytest

from nbody.Body import Body
from nbody.Vec2 import Vec2
from nbody.commands import Clear, Drag, Remove, Spawn, ToggleFreeze
from nbody.simulation import Simulation


class TestStep:
    def test_two_body_scenario(self, sim, make_body):
        """Two equal masses at rest pull on each other symmetrically along x."""
        # mass-derived radius of 10, well clear of the walls and of each other
        a = sim.add_body(Body(Vec2(300, 300), mass=1000.0))
        b = sim.add_body(Body(Vec2(400, 300), mass=1000.0))
        sim.step(0.1)
        assert a.vel.x > 0.0
        assert b.vel.x < 0.0
        assert a.vel.x == -b.vel.x
        assert a.vel.y == 0.0 and b.vel.y == 0.0

    def test_frozen_body_keeps_state(self, sim, make_body):
        frozen = sim.add_body(make_body(200, 300, vx=0.0, frozen=True))
        sim.add_body(make_body(400, 300, mass=5000.0))
        sim.step(0.1)
        assert frozen.pos == Vec2(200, 300)
        assert frozen.vel == Vec2(0, 0)
        assert frozen.force.x > 0.0

    def test_velocity_capped_after_step(self, make_body):
        with Simulation(800, 600, G=1e9, max_velocity=50.0, workers=1, seed=1) as s:
            s.add_body(make_body(300, 300))
            s.add_body(make_body(500, 300))
            s.step(0.1)
            for b in s.bodies:
                assert b.vel.length() <= 50.0

    def test_bodies_stay_in_arena(self, sim):
        sim.populate(40)
        for _ in range(20):
            sim.step(0.1)
        for v in sim.views():
            assert v.radius <= v.x <= sim.width - v.radius
            assert v.radius <= v.y <= sim.height - v.radius

    def test_empty_step_is_noop(self, sim):
        sim.step(0.1)
        assert sim.stats['steps'] == 0

    def test_stats_recorded(self, sim):
        sim.populate(3)
        sim.step(0.1)
        assert sim.stats['steps'] == 1
        assert sim.stats['step_ms'] >= 0.0

    def test_parallel_step_matches_serial(self):
        results = []
        for workers in (1, 4):
            with Simulation(800, 600, workers=workers, seed=99) as s:
                s.populate(80)
                for _ in range(3):
                    s.step(0.1)
                results.append([(v.x, v.y) for v in s.views()])
        assert results[0] == results[1]


class TestInteraction:
    def test_clear_then_spawn_at_point(self, sim):
        sim.populate(5)
        sim.clear()
        assert len(sim) == 0
        body = sim.spawn(Vec2(400, 300))
        assert len(sim) == 1
        assert body.pos == Vec2(400, 300)
        assert body.vel == Vec2(0, 0)

    def test_spawn_random_in_arena_and_mass_range(self, sim):
        for _ in range(50):
            b = sim.spawn()
            assert 100.0 <= b.mass <= 1000.0
            assert b.radius <= b.pos.x <= 800 - b.radius
            assert b.radius <= b.pos.y <= 600 - b.radius

    def test_spawn_outside_arena_is_clamped(self, sim):
        b = sim.spawn(Vec2(-100, 5000))
        assert b.pos.x == pytest.approx(b.radius)
        assert b.pos.y == pytest.approx(600 - b.radius)

    def test_drag_moves_bodies_in_reach(self, sim, make_body):
        near = sim.add_body(make_body(100, 100, vx=5.0, radius=10.0))
        far = sim.add_body(make_body(300, 300, vx=5.0, radius=10.0))
        assert sim.drag(Vec2(110, 105)) == 1
        assert near.pos == Vec2(110, 105)
        assert near.vel == Vec2(0, 0)
        assert far.pos == Vec2(300, 300)
        assert far.vel == Vec2(5, 0)

    def test_toggle_freeze(self, sim, make_body):
        b = sim.add_body(make_body(100, 100, radius=10.0))
        assert sim.toggle_freeze(Vec2(105, 100)) == 1
        assert b.frozen
        sim.toggle_freeze(Vec2(105, 100))
        assert not b.frozen
        assert sim.toggle_freeze(Vec2(500, 500)) == 0

    def test_remove(self, sim, make_body):
        sim.add_body(make_body(100, 100, radius=10.0))
        keep = sim.add_body(make_body(400, 400, radius=10.0))
        assert sim.remove(Vec2(101, 101)) == 1
        assert sim.bodies == [keep]


class TestCommandQueue:
    def test_commands_wait_for_next_step(self, sim):
        sim.submit(Spawn(Vec2(400, 300)))
        sim.submit(Spawn())
        assert len(sim) == 0
        assert sim.pending == 2
        sim.step(0.1)
        assert len(sim) == 2
        assert sim.pending == 0

    def test_commands_applied_in_order(self, sim):
        sim.submit(Spawn(Vec2(400, 300)))
        sim.submit(Clear())
        sim.submit(Spawn(Vec2(100, 100)))
        sim.apply_pending()
        assert len(sim) == 1
        assert sim.bodies[0].pos == Vec2(100, 100)

    def test_drag_freeze_remove_commands(self, sim, make_body):
        b = sim.add_body(make_body(100, 100, vx=1.0, radius=10.0))
        sim.submit(Drag(Vec2(105, 100)))
        sim.submit(ToggleFreeze(Vec2(105, 100)))
        sim.apply_pending()
        assert b.pos == Vec2(105, 100)
        assert b.frozen
        sim.submit(Remove(Vec2(105, 100)))
        sim.apply_pending()
        assert len(sim) == 0

    def test_unknown_command_rejected(self, sim):
        with pytest.raises(TypeError):
            sim.submit("spawn")


class TestConfiguration:
    @pytest.mark.parametrize("kwargs", [
        {'width': 0},
        {'friction': 1.0},
        {'friction': -0.1},
        {'max_velocity': 0},
        {'substeps': 0},
        {'workers': 0},
        {'radius_scale': -1.0},
        {'mass_range': (0.0, 10.0)},
        {'mass_range': (10.0, 1.0)},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            Simulation(**kwargs)

    def test_views_do_not_expose_bodies(self, sim):
        sim.populate(2)
        views = sim.views()
        assert isinstance(views, tuple)
        assert not any(isinstance(v, Body) for v in views)
        assert len(list(sim)) == 2

    def test_kinetic_energy(self, sim, make_body):
        sim.add_body(make_body(100, 100, vx=2.0, mass=4.0, radius=1.0))
        assert sim.kinetic_energy() == pytest.approx(8.0)

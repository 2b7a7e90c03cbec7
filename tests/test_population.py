"""Tests for torus_seir.core.population and dwell-time sampling."""

import dataclasses

import pytest

from torus_seir.core.disease_params import DEFAULT_PARAMS, DiseaseParameters, DwellTimes
from torus_seir.core.population import (
    Compartment,
    Individual,
    Population,
    next_compartment,
)
from torus_seir.core.random_source import RandomSource


# ── Compartment enum ──────────────────────────────────────────────────

class TestCompartment:
    def test_values(self):
        assert Compartment.SUSCEPTIBLE == 0
        assert Compartment.EXPOSED == 1
        assert Compartment.INFECTED == 2
        assert Compartment.RECOVERED == 3
        assert len(Compartment) == 4

    def test_labels(self):
        assert [c.label for c in Compartment] == ['S', 'E', 'I', 'R']


# ── Dwell times ───────────────────────────────────────────────────────

class TestDwellTimes:
    def test_frozen(self):
        dwell = DwellTimes(1, 2, 3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            dwell.exposed = 5

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            DwellTimes(-1, 2, 3)

    def test_sample_draw_order(self, scripted_rng):
        """E, then I, then R thresholds are drawn in that order."""
        rng = scripted_rng([0.5, 0.5, 0.5])
        dwell = DwellTimes.sample(rng, DEFAULT_PARAMS)
        assert dwell == DwellTimes(exposed=2, infected=4, recovered=252)

    def test_sample_reproducible(self):
        a = [DwellTimes.sample(RandomSource(5), DEFAULT_PARAMS) for _ in range(3)]
        b = [DwellTimes.sample(RandomSource(5), DEFAULT_PARAMS) for _ in range(3)]
        assert a == b

    def test_default_params(self):
        assert DEFAULT_PARAMS.exposed_mean == 3
        assert DEFAULT_PARAMS.infected_mean == 7
        assert DEFAULT_PARAMS.recovered_mean == 365
        assert DEFAULT_PARAMS.force_of_infection == 0.5

    def test_invalid_params(self):
        with pytest.raises(ValueError):
            DiseaseParameters(force_of_infection=-0.1)
        with pytest.raises(ValueError):
            DiseaseParameters(infected_mean=-1)

    def test_params_frozen(self):
        """Shared default parameters cannot be mutated by one simulator."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_PARAMS.force_of_infection = 2.0
        assert DEFAULT_PARAMS.force_of_infection == 0.5

    def test_params_carry_only_model_constants(self):
        names = [f.name for f in dataclasses.fields(DiseaseParameters)]
        assert names == ['force_of_infection', 'exposed_mean', 'infected_mean', 'recovered_mean']
        assert not hasattr(DEFAULT_PARAMS, 'R0_estimate')


# ── Transition rule ───────────────────────────────────────────────────

class TestNextCompartment:
    DWELL = DwellTimes(exposed=2, infected=4, recovered=10)

    def test_susceptible_unchanged(self):
        assert next_compartment(Compartment.SUSCEPTIBLE, 99, self.DWELL) == (Compartment.SUSCEPTIBLE, 99)

    @pytest.mark.parametrize("compartment,nxt,threshold", [
        (Compartment.EXPOSED, Compartment.INFECTED, 2),
        (Compartment.INFECTED, Compartment.RECOVERED, 4),
        (Compartment.RECOVERED, Compartment.SUSCEPTIBLE, 10),
    ])
    def test_strict_inequality(self, compartment, nxt, threshold):
        assert next_compartment(compartment, threshold, self.DWELL) == (compartment, threshold)
        assert next_compartment(compartment, threshold + 1, self.DWELL) == (nxt, 0)

    @pytest.mark.parametrize("d", [0, 1, 3, 8])
    def test_exposed_transitions_on_step_d_plus_one(self, d):
        person = Individual(index=0, compartment=Compartment.EXPOSED,
                            dwell=DwellTimes(exposed=d, infected=7, recovered=365))
        for step in range(1, d + 1):
            person.time_in_state += 1
            person.advance()
            assert person.compartment == Compartment.EXPOSED, f"left E early on step {step}"
        person.time_in_state += 1
        person.advance()
        assert person.compartment == Compartment.INFECTED
        assert person.time_in_state == 0

    def test_full_cycle_reuses_dwell_times(self):
        dwell = DwellTimes(exposed=1, infected=2, recovered=3)
        person = Individual(index=0, compartment=Compartment.EXPOSED, dwell=dwell)
        seen = []
        for _ in range(2 * (2 + 3 + 4)):
            person.time_in_state += 1
            person.advance()
            seen.append(person.compartment)
        # E lasts 2 steps, I 3 steps, R 4 steps; S is sticky without infection
        assert seen[:9] == (
            [Compartment.EXPOSED, Compartment.INFECTED]
            + [Compartment.INFECTED] * 2 + [Compartment.RECOVERED]
            + [Compartment.RECOVERED] * 3 + [Compartment.SUSCEPTIBLE]
        )
        assert person.dwell is dwell


# ── Population registry ───────────────────────────────────────────────

class TestPopulation:
    def test_indices_sequential(self):
        pop = Population()
        people = [pop.add(Compartment.SUSCEPTIBLE, DwellTimes(1, 1, 1)) for _ in range(4)]
        assert [p.index for p in people] == [0, 1, 2, 3]
        assert pop[2] is people[2]
        assert len(pop) == pop.size == 4

    def test_state_counts(self):
        pop = Population()
        for c in [Compartment.SUSCEPTIBLE] * 3 + [Compartment.INFECTED] * 2:
            pop.add(c, DwellTimes(1, 1, 1))
        counts = pop.get_state_counts()
        assert counts[Compartment.SUSCEPTIBLE] == 3
        assert counts[Compartment.INFECTED] == 2
        assert counts[Compartment.EXPOSED] == 0
        assert sum(counts.values()) == len(pop)
        assert pop.get_state_count(Compartment.INFECTED) == 2
        assert pop.is_infected(4)
        assert not pop.is_infected(0)

    def test_set_compartment_resets_timer(self):
        person = Individual(index=0, compartment=Compartment.SUSCEPTIBLE, dwell=DwellTimes(1, 1, 1))
        person.time_in_state = 40
        person.set_compartment(Compartment.EXPOSED)
        assert person.compartment == Compartment.EXPOSED
        assert person.time_in_state == 0

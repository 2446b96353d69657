"""
Unit tests for diversity index computation.

Tests cover:
- Degenerate samples (empty, single individual, single species)
- Known values for an even two-species sample
- Evenness monotonicity
- Finiteness and purity
- Opaque species identifiers
"""
import math
import uuid

import pytest
from pydantic import ValidationError

from app.domain.models import DiversityIndices, Observation
from app.services.domain.diversity_calculator import DiversityCalculator
from app.utils.diversity_formulas import (
    build_abundance_table,
    margalef_index,
    menhinick_index,
    pielou_evenness,
    simpson_complement,
    species_proportions,
)


def observations_for(*counts: int) -> list[Observation]:
    """counts[i] individuals of species i + 1."""
    result = []
    for species_id, count in enumerate(counts, start=1):
        result.extend(Observation(species_id=species_id) for _ in range(count))
    return result


def all_values(indices: DiversityIndices) -> list[float]:
    return list(indices.model_dump().values())


@pytest.fixture
def calculator() -> DiversityCalculator:
    return DiversityCalculator()


# ============================================================
# Degenerate Sample Tests
# ============================================================

class TestDegenerateSamples:
    """Tests for samples where formulas would divide by zero."""

    def test_empty_sample_is_all_zero(self, calculator):
        """No observations should yield zero for every index."""
        indices = calculator.compute_indices([])

        assert indices == DiversityIndices(
            species_richness=0,
            shannon_wiener=0.0,
            simpson_index=0.0,
            simpson_reciprocal=0.0,
            pielou_evenness=0.0,
            menhinick_index=0.0,
            margalef_index=0.0,
        )

    def test_single_individual(self, calculator):
        """One individual: richness 1, full dominance, guarded ratios."""
        indices = calculator.compute_indices([Observation(species_id="A")])

        assert indices.species_richness == 1
        assert indices.shannon_wiener == 0
        assert indices.simpson_index == 1
        assert indices.simpson_reciprocal == 0
        assert indices.pielou_evenness == 0
        assert indices.menhinick_index == 1
        assert indices.margalef_index == 0

    def test_single_species_many_individuals(self, calculator):
        """A monoculture has no diversity and no evenness."""
        indices = calculator.compute_indices(observations_for(9))

        assert indices.species_richness == 1
        assert indices.shannon_wiener == 0
        assert indices.simpson_index == pytest.approx(1.0)
        assert indices.simpson_reciprocal == pytest.approx(0.0)
        assert indices.pielou_evenness == 0
        assert indices.menhinick_index == pytest.approx(1 / 3)
        assert indices.margalef_index == 0

    def test_shannon_is_not_negative_zero(self, calculator):
        """Single-species samples should report +0.0."""
        indices = calculator.compute_indices(observations_for(4))

        assert math.copysign(1.0, indices.shannon_wiener) == 1.0


# ============================================================
# Known Value Tests
# ============================================================

class TestKnownValues:
    """Tests against hand-computed index values."""

    def test_even_two_species(self, calculator, even_two_species):
        """Two species with two individuals each."""
        indices = calculator.compute_indices(even_two_species)

        assert indices.species_richness == 2
        assert indices.shannon_wiener == pytest.approx(math.log(2))
        assert indices.simpson_index == pytest.approx(0.5)
        assert indices.simpson_reciprocal == pytest.approx(0.5)
        assert indices.pielou_evenness == pytest.approx(1.0)
        assert indices.menhinick_index == pytest.approx(1.0)
        assert indices.margalef_index == pytest.approx(1 / math.log(4))

    def test_three_singletons(self, calculator):
        """Three species with one individual each."""
        indices = calculator.compute_indices(observations_for(1, 1, 1))

        assert indices.species_richness == 3
        assert indices.shannon_wiener == pytest.approx(math.log(3))
        assert indices.simpson_index == pytest.approx(1 / 3)
        assert indices.simpson_reciprocal == pytest.approx(2 / 3)
        assert indices.pielou_evenness == pytest.approx(1.0)
        assert indices.menhinick_index == pytest.approx(math.sqrt(3))
        assert indices.margalef_index == pytest.approx(2 / math.log(3))

    def test_uneven_sample(self, calculator):
        """Counts 3 and 1: p = 0.75, 0.25."""
        indices = calculator.compute_indices(observations_for(3, 1))

        expected_shannon = -(0.75 * math.log(0.75) + 0.25 * math.log(0.25))
        assert indices.shannon_wiener == pytest.approx(expected_shannon)
        assert indices.simpson_index == pytest.approx(0.625)
        assert indices.simpson_reciprocal == pytest.approx(0.375)
        assert indices.pielou_evenness == pytest.approx(expected_shannon / math.log(2))

    def test_reciprocal_is_complement_not_inverse(self, calculator):
        """simpson_reciprocal reports 1 - D, not 1 / D."""
        indices = calculator.compute_indices(observations_for(3, 1))

        assert indices.simpson_reciprocal == pytest.approx(1 - indices.simpson_index)
        assert indices.simpson_reciprocal != pytest.approx(1 / indices.simpson_index)

    def test_measurements_do_not_affect_indices(self, calculator):
        """Only species identity matters."""
        bare = [Observation(species_id=1), Observation(species_id=2)]
        measured = [
            Observation(species_id=1, gbh=120.0, dbh=38.2, height=21.0),
            Observation(species_id=2, height_at_first_branch=4.0, canopy_cover=75.0),
        ]

        assert calculator.compute_indices(bare) == calculator.compute_indices(measured)


# ============================================================
# Property Tests
# ============================================================

class TestProperties:
    """Tests for invariants that hold for every sample."""

    @pytest.mark.parametrize("counts", [
        (),
        (1,),
        (2,),
        (1, 1),
        (100, 1),
        (5, 4, 3, 3, 2, 2, 1, 1, 1, 1),
        tuple(range(1, 40)),
        (1,) * 250,
    ])
    def test_all_indices_finite(self, calculator, counts):
        """No index should ever be NaN or infinite."""
        indices = calculator.compute_indices(observations_for(*counts))

        assert all(math.isfinite(v) for v in all_values(indices))

    def test_evenness_increases_diversity(self, calculator):
        """Redistributing a fixed N towards evenness raises H' and 1 - D."""
        samples = [observations_for(5, 1), observations_for(4, 2), observations_for(3, 3)]
        results = [calculator.compute_indices(s) for s in samples]

        shannon = [r.shannon_wiener for r in results]
        gini_simpson = [r.simpson_reciprocal for r in results]

        assert shannon[0] < shannon[1] < shannon[2]
        assert gini_simpson[0] < gini_simpson[1] < gini_simpson[2]

    def test_repeated_calls_are_identical(self, calculator, even_two_species):
        """Calculator should hold no state between calls."""
        first = calculator.compute_indices(even_two_species)
        second = calculator.compute_indices(even_two_species)

        assert first == second
        assert all_values(first) == all_values(second)

    def test_input_is_not_mutated(self, calculator, even_two_species):
        """Observations list should be left untouched."""
        snapshot = [o.model_copy() for o in even_two_species]

        calculator.compute_indices(even_two_species)

        assert even_two_species == snapshot

    def test_result_is_immutable(self, calculator, even_two_species):
        """DiversityIndices is a frozen value object."""
        indices = calculator.compute_indices(even_two_species)

        with pytest.raises(ValidationError):
            indices.species_richness = 10


# ============================================================
# Species Identifier Tests
# ============================================================

class TestSpeciesIdentifiers:
    """Tests for opaque species identifiers."""

    def test_string_identifiers(self, calculator):
        observations = [
            Observation(species_id="Tectona grandis"),
            Observation(species_id="Santalum album"),
            Observation(species_id="Tectona grandis"),
        ]

        indices = calculator.compute_indices(observations)

        assert indices.species_richness == 2

    def test_uuid_identifiers(self, calculator):
        teak, rosewood = uuid.uuid4(), uuid.uuid4()
        observations = [Observation(species_id=s) for s in (teak, rosewood, rosewood)]

        indices = calculator.compute_indices(observations)

        assert indices.species_richness == 2
        assert indices.simpson_index == pytest.approx((1 / 3) ** 2 + (2 / 3) ** 2)

    def test_camel_case_input(self):
        """Observations accept camelCase keys from the field app."""
        observation = Observation.model_validate({"speciesId": 7, "heightAtFirstBranch": 3.2})

        assert observation.species_id == 7
        assert observation.height_at_first_branch == 3.2


# ============================================================
# Formula Helper Tests
# ============================================================

class TestFormulaHelpers:
    """Tests for the individual formula helpers."""

    def test_abundance_table_counts(self):
        table = build_abundance_table([1, 2, 1, 3, 1])

        assert table == {1: 3, 2: 1, 3: 1}

    def test_proportions_of_empty_table(self):
        assert species_proportions(build_abundance_table([])).size == 0

    def test_proportions_sum_to_one(self):
        proportions = species_proportions(build_abundance_table("aabbbc"))

        assert proportions.sum() == pytest.approx(1.0)

    def test_simpson_complement_guard(self):
        assert simpson_complement(0.0) == 0.0
        assert simpson_complement(0.25) == 0.75

    def test_pielou_guard(self):
        assert pielou_evenness(1.2, 0) == 0.0
        assert pielou_evenness(1.2, 1) == 0.0

    def test_menhinick_guard(self):
        assert menhinick_index(0, 0) == 0.0
        assert menhinick_index(4, 16) == 1.0

    def test_margalef_guard(self):
        assert margalef_index(0, 0) == 0.0
        assert margalef_index(1, 1) == 0.0
        assert margalef_index(3, math.e ** 2) == pytest.approx(1.0)

"""Solis-Wets local search over ligand genotypes."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ligdock.constants import LS_CONT_FACTOR, LS_EXP_FACTOR

RandomFn = Callable[[], float]

# Probability that a single gene is perturbed in a step.
_GENE_PERTURB_PROB = 0.09


@dataclass(frozen=True)
class SolisWetsSettings:
    """Parameters of the Solis-Wets local search."""

    base_dmov_mul_sqrt3: float
    base_dang_mul_sqrt3: float
    cons_limit: int
    max_num_of_iters: int
    rho_lower_bound: float
    lsearch_rate: float = 100.0
    num_of_lsentities: int = 1


@dataclass(frozen=True)
class LocalSearchResult:
    """Best genotype found, its energy and the number of energy evaluations."""

    genotype: list[float]
    energy: float
    evaluations: int


def normalize_angles(genotype: Sequence[float]) -> list[float]:
    """A copy of ``genotype`` with every gene from index 3 on wrapped into [0, 360)."""
    result = list(genotype[:3])
    for value in genotype[3:]:
        wrapped = value % 360.0
        result.append(0.0 if wrapped >= 360.0 else wrapped)
    return result


def select_entity(
    entity_id: int,
    num_lsentities: int,
    lsearch_rate: float,
    rand: RandomFn | None = None,
) -> int:
    """Entity of a run to subject to local search.

    Entity 0 is the elite; it is searched only with probability
    ``lsearch_rate`` percent, otherwise entity ``num_lsentities`` is used.
    """
    if entity_id != 0:
        return entity_id
    draw = rand if rand is not None else random.random
    if 100.0 * draw() > lsearch_rate:
        return num_lsentities
    return entity_id


def solis_wets(
    genotype: Sequence[float],
    energy: float,
    energy_fn: Callable[[list[float]], float],
    settings: SolisWetsSettings,
    rand: RandomFn | None = None,
) -> LocalSearchResult:
    """Improve ``genotype`` (with energy ``energy``) by Solis-Wets random search."""
    draw = rand if rand is not None else random.random
    best = list(genotype)
    best_energy = energy
    bias = [0.0] * len(best)
    rho = 1.0
    cons_succ = cons_fail = 0
    evaluations = 0
    iterations = 0

    while True:
        deviate = []
        for index in range(len(best)):
            step = rho * (2 * draw() - 1)
            step *= 1.0 if draw() < _GENE_PERTURB_PROB else 0.0
            scale = (
                settings.base_dmov_mul_sqrt3 if index < 3 else settings.base_dang_mul_sqrt3
            )
            deviate.append(step * scale)

        direction = 1.0
        candidate = [b + (d + s) for b, d, s in zip(best, deviate, bias)]
        candidate_energy = energy_fn(candidate)
        evaluations += 1
        improved = candidate_energy < best_energy

        if not improved:
            direction = -1.0
            candidate = [b - (d + s) for b, d, s in zip(best, deviate, bias)]
            candidate_energy = energy_fn(candidate)
            evaluations += 1
            improved = candidate_energy < best_energy

        if improved:
            best = candidate
            bias = [0.6 * s + direction * 0.4 * d for s, d in zip(bias, deviate)]
            best_energy = candidate_energy
            cons_succ += 1
            cons_fail = 0
        else:
            bias = [0.5 * s for s in bias]
            cons_succ = 0
            cons_fail += 1

        if cons_succ >= settings.cons_limit:
            rho *= LS_EXP_FACTOR
            cons_succ = 0
        elif cons_fail >= settings.cons_limit:
            rho *= LS_CONT_FACTOR
            cons_fail = 0

        iterations += 1
        if iterations >= settings.max_num_of_iters or rho <= settings.rho_lower_bound:
            break

    return LocalSearchResult(normalize_angles(best), best_energy, evaluations)


def run_local_search(
    population: Sequence[Sequence[float]],
    energies: Sequence[float],
    settings: SolisWetsSettings,
    energy_fn: Callable[[list[float], int], float],
    num_of_runs: int,
    pop_size: int,
    rand: RandomFn | None = None,
) -> tuple[list[list[float]], list[float], list[int]]:
    """Apply local search to ``num_of_lsentities`` entities of every run.

    ``population`` holds ``num_of_runs * pop_size`` genotypes, run by run;
    ``energy_fn`` is called with a genotype and its run index.  Returns the
    new population, the new energies and the number of energy evaluations
    spent on each individual.
    """
    total = num_of_runs * pop_size
    if len(population) != total or len(energies) != total:
        raise ValueError(
            f"population and energies must hold {total} entries "
            f"({num_of_runs} runs of {pop_size})"
        )
    new_population = [list(genotype) for genotype in population]
    new_energies = list(energies)
    evaluations = [0] * total

    for run_id in range(num_of_runs):
        def run_energy(genotype: list[float], run_id: int = run_id) -> float:
            return energy_fn(genotype, run_id)

        for entity in range(settings.num_of_lsentities):
            chosen = select_entity(
                entity, settings.num_of_lsentities, settings.lsearch_rate, rand
            )
            if chosen >= pop_size:
                raise ValueError(
                    f"entity {chosen} does not exist in a population of {pop_size}"
                )
            index = run_id * pop_size + chosen
            result = solis_wets(
                new_population[index], new_energies[index], run_energy, settings, rand
            )
            new_population[index] = result.genotype
            new_energies[index] = result.energy
            evaluations[index] += result.evaluations

    return new_population, new_energies, evaluations
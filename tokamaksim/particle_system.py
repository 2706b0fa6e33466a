"""Structure-of-arrays store for simulated ions."""

from __future__ import annotations

import math
from typing import List, Optional

from tokamaksim.config import DEFAULT_MAX_PARTICLES, ParticleType
from tokamaksim.vec import Vec3


class ParticleSystem:
    """Bounded collection of macro-particles kept as parallel lists."""

    def __init__(self, max_particles: int = DEFAULT_MAX_PARTICLES) -> None:
        self._max_particles = max_particles
        self.positions: List[Vec3] = []
        self.velocities: List[Vec3] = []
        self.masses: List[float] = []
        self.charges: List[float] = []
        self.weights: List[float] = []
        self.charge_to_mass: List[float] = []
        self.species: List[ParticleType] = []
        self.macro_weight: float = 1.0e12
        self.fusion_count_total: int = 0

    @property
    def max_particles(self) -> int:
        return self._max_particles

    def __len__(self) -> int:
        return len(self.positions)

    def _columns(self) -> tuple:
        return (
            self.positions,
            self.velocities,
            self.masses,
            self.charges,
            self.weights,
            self.charge_to_mass,
            self.species,
        )

    def can_insert(self, count: int) -> bool:
        """Whether ``count`` more particles fit under the cap."""
        size = len(self.positions)
        if size > self._max_particles:
            return False
        return self._max_particles - size >= count

    def add_particle(
        self,
        position: Vec3,
        velocity: Vec3,
        mass_kg: float,
        charge_c: float,
        species: ParticleType,
        weight: Optional[float] = None,
    ) -> bool:
        """Append a particle; return False when the cap is hit or the data is invalid."""
        if weight is None:
            weight = self.macro_weight
        if not self.can_insert(1):
            return False
        if not position.is_finite() or not velocity.is_finite():
            return False
        if not math.isfinite(mass_kg) or mass_kg <= 0.0:
            return False
        if not math.isfinite(charge_c) or charge_c == 0.0:
            return False
        if not math.isfinite(weight) or weight <= 0.0:
            return False

        self.positions.append(position)
        self.velocities.append(velocity)
        self.masses.append(mass_kg)
        self.charges.append(charge_c)
        self.weights.append(weight)
        self.charge_to_mass.append(charge_c / mass_kg)
        self.species.append(species)
        return True

    def mark_dead(self, index: int) -> None:
        """Flag a particle for removal at the next compaction."""
        self.species[index] = ParticleType.DEAD

    def compact(self) -> None:
        """Remove dead particles, filling each hole with the last particle."""
        i = 0
        while i < len(self.positions):
            if self.species[i] is ParticleType.DEAD:
                for column in self._columns():
                    last = column.pop()
                    if i < len(column):
                        column[i] = last
            else:
                i += 1

    def is_array_length_consistent(self) -> bool:
        n = len(self.positions)
        return all(len(column) == n for column in self._columns())

    def is_finite_state(self) -> bool:
        """All arrays agree in length and every stored value is finite."""
        if not self.is_array_length_consistent():
            return False
        for pos, vel, mass, charge, weight, qm in zip(
            self.positions,
            self.velocities,
            self.masses,
            self.charges,
            self.weights,
            self.charge_to_mass,
        ):
            if not pos.is_finite() or not vel.is_finite():
                return False
            if not all(math.isfinite(v) for v in (mass, charge, weight, qm)) or weight <= 0.0:
                return False
        return True

    def species_at(self, index: int) -> ParticleType:
        """Species of particle ``index``; raise IndexError if out of range."""
        if not 0 <= index < len(self.species):
            raise IndexError(f"particle index {index} out of range")
        return self.species[index]
"""
Goal use cases - financial targets
"""
from dataclasses import replace
from datetime import date
from decimal import Decimal, InvalidOperation

from cgest.domain.goal import Goal
from cgest.domain.period import new_id
from cgest.infrastructure.storage.repository import Storage


class GoalValidationError(ValueError):
    """Erro de validação de meta"""
    pass


def _amount(value, label: str) -> Decimal:
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise GoalValidationError(f"{label} inválido: {value!r}")


class CreateGoalUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(
        self,
        description: str,
        target_value,
        current_value=0,
        deadline: date | None = None,
    ) -> Goal:
        """
        Criar meta

        Raises:
            GoalValidationError: descrição vazia ou valor-alvo não positivo
        """
        description = (description or "").strip()
        if not description:
            raise GoalValidationError("Descrição da meta não pode ser vazia")
        target = _amount(target_value, "Valor-alvo")
        if target <= 0:
            raise GoalValidationError("Valor-alvo deve ser maior que zero")

        goal = Goal(
            id=new_id(),
            description=description,
            target_value=target,
            current_value=_amount(current_value or 0, "Valor atual"),
            deadline=deadline,
        )
        return self.storage.goals.upsert(goal)


class UpdateGoalUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, goal_id: str, **changes) -> Goal:
        goal = self.storage.goals.get(goal_id)
        if goal is None:
            raise GoalValidationError("Meta não encontrada")

        unknown = set(changes) - {"description", "target_value", "current_value", "deadline"}
        if unknown:
            raise GoalValidationError(f"Campos não suportados: {', '.join(sorted(unknown))}")

        if "description" in changes:
            changes["description"] = (changes["description"] or "").strip()
            if not changes["description"]:
                raise GoalValidationError("Descrição da meta não pode ser vazia")
        if "target_value" in changes:
            changes["target_value"] = _amount(changes["target_value"], "Valor-alvo")
            if changes["target_value"] <= 0:
                raise GoalValidationError("Valor-alvo deve ser maior que zero")
        if "current_value" in changes:
            changes["current_value"] = _amount(changes["current_value"] or 0, "Valor atual")

        return self.storage.goals.upsert(replace(goal, **changes))


class DeleteGoalUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, goal_id: str) -> None:
        if not self.storage.goals.delete(goal_id):
            raise GoalValidationError("Meta não encontrada")

"""
Seed demo data for the default account (DEFAULT_ACCOUNT_ID).
Run:  python seed_test_data.py
"""
from datetime import date, time
from decimal import Decimal

from cgest.config import get_settings
from cgest.infrastructure.db.session import get_session_factory
from cgest.infrastructure.storage.repository import BACKEND_SQL, open_storage
from cgest.application.clients import CreateClientUseCase
from cgest.application.goals import CreateGoalUseCase
from cgest.application.payments import PaymentLedger
from cgest.application.projects import CreateProjectUseCase, ChangeProjectPaymentStatusUseCase
from cgest.application.tasks_usecases import CreateTaskUseCase

settings = get_settings()
db = get_session_factory()() if settings.STORAGE_BACKEND == BACKEND_SQL else None
storage = open_storage(settings, settings.DEFAULT_ACCOUNT_ID, db=db)
today = settings.today()

if storage.clients.list():
    print(f"Base data exists ({len(storage.clients.list())} clients). Nothing to do.")
    raise SystemExit(0)

# ── clientes ─────────────────────────────────────────────────────
padaria = CreateClientUseCase(storage).execute(
    name="Padaria Pão Quente", client_type="recurring",
    monthly_value=Decimal("450"), due_day=5,
)
clinica = CreateClientUseCase(storage).execute(
    name="Clínica Sorriso", client_type="recurring",
    monthly_value=Decimal("900"), due_day=15,
)
loja = CreateClientUseCase(storage).execute(name="Loja da Ana", client_type="one-off")

# ── pagamentos: meses anteriores pagos, mês atual pendente ──────
ledger = PaymentLedger(storage, today=lambda: today)
for month in range(1, today.month):
    ledger.toggle(padaria, today.year, month)
    ledger.toggle(clinica, today.year, month)
ledger.upsert(clinica.id, clinica.billing_date(today.year, today.month), {"value": Decimal("900")})

# ── projetos ────────────────────────────────────────────────────
site = CreateProjectUseCase(storage).execute(
    client_id=loja.id, name="Site institucional", budget=Decimal("3200"),
    status="in_progress", deadline=date(today.year, today.month, 28),
)
logo = CreateProjectUseCase(storage).execute(
    client_id=padaria.id, name="Identidade visual", budget=Decimal("1200"), status="completed",
)
ChangeProjectPaymentStatusUseCase(storage, today=lambda: today).execute(logo.id, "paid")

# ── metas e tarefas ─────────────────────────────────────────────
CreateGoalUseCase(storage).execute(description="Faturar R$ 50 mil no ano", target_value=Decimal("50000"))
CreateTaskUseCase(storage).execute(title="Enviar proposta para Loja da Ana", project_id=site.id, due_date=today)
CreateTaskUseCase(storage).execute(
    title="Reunião de alinhamento", due_date=today, is_meeting=True, meeting_time=time(14, 30),
)

print(f"Seeded {len(storage.clients.list())} clients, {len(storage.payments.list())} payments")
if db is not None:
    db.close()

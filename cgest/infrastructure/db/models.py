"""
SQLAlchemy ORM models

Cada tabela guarda uma coleção de registros de domínio. As colunas têm os
mesmos nomes dos campos das dataclasses em cgest.domain; `pk` é só a chave
de ordenação (ordem de inserção) e `account_id` o dono do registro.
"""
from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import (
    String, Integer, SmallInteger, Text, Boolean, Numeric, Date, Time,
    TIMESTAMP, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from cgest.infrastructure.db.session import Base


class ClientModel(Base):
    __tablename__ = "clients"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False, server_default="one-off")
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="active")
    monthly_value: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=2), nullable=True)
    due_day: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    drive_folder_url: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    created_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("account_id", "id", name="uq_clients_account_id"),
    )


class PaymentModel(Base):
    """
    Pagamentos de clientes.

    Sem unique (client_id, ano, mês): dados antigos podem ter duplicatas,
    a chave natural é garantida pelo PaymentLedger na escrita.
    """
    __tablename__ = "payments"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    client_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    value: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, server_default="0")
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="pending")
    paid_at: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    receipt_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    year: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    month: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)

    __table_args__ = (
        UniqueConstraint("account_id", "id", name="uq_payments_account_id"),
    )


class ProjectModel(Base):
    __tablename__ = "projects"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    client_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, server_default="pending")
    payment_status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="pending")
    paid_at: Mapped[date | None] = mapped_column(Date, nullable=True)
    budget: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, server_default="0")
    deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("account_id", "id", name="uq_projects_account_id"),
    )


class GoalModel(Base):
    __tablename__ = "goals"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    description: Mapped[str] = mapped_column(String(255), nullable=False)
    target_value: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    current_value: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False, server_default="0")
    deadline: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        UniqueConstraint("account_id", "id", name="uq_goals_account_id"),
    )


class TaskModel(Base):
    __tablename__ = "tasks"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    project_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    is_meeting: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    meeting_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    google_event_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint("account_id", "id", name="uq_tasks_account_id"),
    )


class UserProfileModel(Base):
    __tablename__ = "user_profiles"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("account_id", "id", name="uq_user_profiles_account_id"),
    )

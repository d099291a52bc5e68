"""001 – Initial schema: all tables, indexes and enums.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 10:00:00.000000+00:00
"""

from alembic import op

# Revision identifiers
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# SQLAlchemy persists enum member names, so the labels here are the names.
ENUM_TYPES: list[tuple[str, list[str]]] = [
    ("user_role", ["employee", "manager", "hr_admin", "system_admin"]),
    ("company_size", ["STARTUP", "SMALL", "MEDIUM", "LARGE", "ENTERPRISE"]),
    ("gender", ["MALE", "FEMALE", "OTHER", "PREFER_NOT_TO_SAY"]),
    ("employee_status", ["ACTIVE", "INACTIVE", "TERMINATED", "ON_LEAVE"]),
    (
        "benefit_type",
        [
            "HEALTH_INSURANCE",
            "DENTAL_INSURANCE",
            "VISION_INSURANCE",
            "LIFE_INSURANCE",
            "RETIREMENT_401K",
            "VACATION",
            "SICK_LEAVE",
            "OTHER",
        ],
    ),
    ("enrollment_status", ["ACTIVE", "CANCELLED"]),
    ("cycle_type", ["ANNUAL", "QUARTERLY", "MONTHLY", "PROJECT_BASED"]),
    (
        "cycle_status",
        ["PLANNED", "ACTIVE", "IN_REVIEW", "CALIBRATION", "COMPLETED", "CANCELLED"],
    ),
    (
        "review_type",
        ["ANNUAL", "MID_YEAR", "PROBATION", "PROJECT", "QUARTERLY", "CONTINUOUS"],
    ),
    (
        "review_status",
        [
            "DRAFT",
            "IN_PROGRESS",
            "SELF_REVIEW",
            "MANAGER_REVIEW",
            "PENDING_APPROVAL",
            "CALIBRATION",
            "COMPLETED",
            "ACKNOWLEDGED",
        ],
    ),
    (
        "promotion_recommendation",
        ["NONE", "NOT_READY", "READY_NOW", "READY_6_MONTHS", "READY_12_MONTHS"],
    ),
    ("goal_category", ["PERFORMANCE", "DEVELOPMENT", "CAREER", "PROJECT", "COMPANY"]),
    (
        "goal_status",
        ["NOT_STARTED", "IN_PROGRESS", "COMPLETED", "CANCELLED", "ON_HOLD"],
    ),
    ("time_record_status", ["PENDING", "APPROVED", "REJECTED", "NEEDS_REVIEW"]),
    (
        "expense_status",
        ["PENDING", "APPROVED", "REJECTED", "REIMBURSED", "CANCELLED"],
    ),
    (
        "training_type",
        ["ONLINE", "IN_PERSON", "WORKSHOP", "SEMINAR", "CONFERENCE", "CERTIFICATION"],
    ),
    ("training_status", ["ENROLLED", "IN_PROGRESS", "COMPLETED", "CANCELLED"]),
    ("skill_level", ["BEGINNER", "INTERMEDIATE", "ADVANCED", "EXPERT"]),
    (
        "project_status",
        ["PLANNING", "IN_PROGRESS", "ON_HOLD", "COMPLETED", "CANCELLED"],
    ),
    ("priority", ["LOW", "MEDIUM", "HIGH", "URGENT"]),
    (
        "announcement_type",
        ["GENERAL", "POLICY", "EVENT", "HOLIDAY", "URGENT"],
    ),
    ("announcement_status", ["DRAFT", "PUBLISHED", "ARCHIVED"]),
]


def _create_enum(name: str, values: list[str]) -> None:
    vals = ", ".join(f"'{v}'" for v in values)
    op.execute(f"CREATE TYPE {name} AS ENUM ({vals})")


def _drop_enum(name: str) -> None:
    op.execute(f"DROP TYPE IF EXISTS {name}")


# ---------------------------------------------------------------------------
# UPGRADE
# ---------------------------------------------------------------------------


def upgrade() -> None:
    # ── Extensions ────────────────────────────────────────────────────────
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ── Enum types ────────────────────────────────────────────────────────
    for name, values in ENUM_TYPES:
        _create_enum(name, values)

    # ── 1. users ──────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE users (
            id             UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            email          VARCHAR(255) NOT NULL UNIQUE,
            password_hash  VARCHAR(255) NOT NULL,
            is_active      BOOLEAN NOT NULL DEFAULT TRUE,
            role           user_role NOT NULL DEFAULT 'employee',
            created_at     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # ── 2. user_sessions ──────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE user_sessions (
            id                  UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            user_id             UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            token_hash          VARCHAR(128) NOT NULL,
            refresh_token_hash  VARCHAR(128),
            ip_address          INET,
            user_agent          TEXT,
            expires_at          TIMESTAMPTZ NOT NULL,
            is_revoked          BOOLEAN NOT NULL DEFAULT FALSE,
            created_at          TIMESTAMPTZ DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_user_sessions_user_id ON user_sessions(user_id)")
    op.execute("CREATE INDEX ix_user_sessions_token_hash ON user_sessions(token_hash)")
    op.execute(
        "CREATE INDEX ix_user_sessions_refresh_token_hash "
        "ON user_sessions(refresh_token_hash)"
    )

    # ── 3. audit_trail ────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE audit_trail (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            actor_id     UUID REFERENCES users(id) ON DELETE SET NULL,
            action       VARCHAR(50) NOT NULL,
            entity_type  VARCHAR(50) NOT NULL,
            entity_id    UUID NOT NULL,
            old_values   JSONB,
            new_values   JSONB,
            ip_address   INET,
            user_agent   TEXT,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_audit_trail_actor_id ON audit_trail(actor_id)")
    op.execute("CREATE INDEX ix_audit_trail_entity ON audit_trail(entity_type, entity_id)")
    op.execute("CREATE INDEX ix_audit_trail_created_at ON audit_trail(created_at)")
    op.execute("CREATE INDEX ix_audit_trail_action ON audit_trail(action)")

    # ── 4. companies ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE companies (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name         VARCHAR(200) NOT NULL UNIQUE,
            description  TEXT,
            website      VARCHAR(255),
            industry     VARCHAR(100),
            size         company_size,
            address      TEXT,
            phone        VARCHAR(30),
            email        VARCHAR(255),
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # ── 5. departments ────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE departments (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name         VARCHAR(150) NOT NULL,
            description  TEXT,
            code         VARCHAR(20),
            company_id   UUID REFERENCES companies(id),
            parent_id    UUID REFERENCES departments(id),
            head_id      UUID,  -- FK added after employees table
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_dept_company_code UNIQUE (company_id, code)
        )
    """)
    op.execute("CREATE INDEX ix_departments_company_id ON departments(company_id)")

    # ── 6. employees ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE employees (
            id                       UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_number          VARCHAR(50)  NOT NULL UNIQUE,
            first_name               VARCHAR(100) NOT NULL,
            last_name                VARCHAR(100) NOT NULL,
            email                    VARCHAR(255) NOT NULL UNIQUE,
            phone                    VARCHAR(30),
            date_of_birth            DATE,
            gender                   gender,
            address                  TEXT,
            city                     VARCHAR(100),
            state                    VARCHAR(100),
            postal_code              VARCHAR(20),
            country                  VARCHAR(100),
            hire_date                DATE NOT NULL,
            termination_date         DATE,
            status                   employee_status NOT NULL DEFAULT 'ACTIVE',
            emergency_contact_name   VARCHAR(200),
            emergency_contact_phone  VARCHAR(30),
            company_id               UUID REFERENCES companies(id),
            department_id            UUID REFERENCES departments(id),
            manager_id               UUID REFERENCES employees(id),
            user_id                  UUID UNIQUE REFERENCES users(id) ON DELETE SET NULL,
            created_at               TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at               TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_employees_company_id ON employees(company_id)")
    op.execute("CREATE INDEX ix_employees_department_id ON employees(department_id)")
    op.execute("CREATE INDEX ix_employees_manager_id ON employees(manager_id)")
    op.execute("CREATE INDEX ix_employees_status ON employees(status)")

    # Deferred FK: departments.head_id -> employees
    op.execute("""
        ALTER TABLE departments
            ADD CONSTRAINT fk_dept_head
            FOREIGN KEY (head_id) REFERENCES employees(id)
    """)

    # ── 7. benefits ───────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE benefits (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name         VARCHAR(200) NOT NULL,
            description  TEXT,
            type         benefit_type NOT NULL,
            provider     VARCHAR(200),
            cost         NUMERIC(12,2),
            currency     VARCHAR(3) NOT NULL DEFAULT 'USD',
            is_active    BOOLEAN NOT NULL DEFAULT TRUE,
            company_id   UUID NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_benefit_company_name UNIQUE (company_id, name)
        )
    """)
    op.execute("CREATE INDEX ix_benefits_company_id ON benefits(company_id)")

    # ── 8. employee_benefits ──────────────────────────────────────────────
    op.execute("""
        CREATE TABLE employee_benefits (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id  UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            benefit_id   UUID NOT NULL REFERENCES benefits(id) ON DELETE RESTRICT,
            status       enrollment_status NOT NULL DEFAULT 'ACTIVE',
            enrolled_at  TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT uq_employee_benefit UNIQUE (employee_id, benefit_id)
        )
    """)
    op.execute("CREATE INDEX ix_employee_benefits_employee_id ON employee_benefits(employee_id)")
    op.execute("CREATE INDEX ix_employee_benefits_benefit_id ON employee_benefits(benefit_id)")

    # ── 9. performance_cycles ─────────────────────────────────────────────
    op.execute("""
        CREATE TABLE performance_cycles (
            id                 UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name               VARCHAR(200) NOT NULL,
            description        TEXT,
            cycle_type         cycle_type NOT NULL,
            company_id         UUID NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
            start_date         DATE NOT NULL,
            end_date           DATE NOT NULL,
            review_start_date  DATE,
            review_end_date    DATE,
            status             cycle_status NOT NULL DEFAULT 'PLANNED',
            created_at         TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at         TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute(
        "CREATE INDEX ix_performance_cycles_company_id ON performance_cycles(company_id)"
    )

    # ── 10. performance_reviews ───────────────────────────────────────────
    op.execute("""
        CREATE TABLE performance_reviews (
            id                              UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id                     UUID NOT NULL REFERENCES employees(id),
            reviewer_id                     UUID NOT NULL REFERENCES employees(id),
            cycle_id                        UUID REFERENCES performance_cycles(id),
            period                          VARCHAR(50) NOT NULL,
            type                            review_type NOT NULL,
            status                          review_status NOT NULL DEFAULT 'DRAFT',
            overall_rating                  DOUBLE PRECISION,
            final_rating                    DOUBLE PRECISION,
            self_assessment                 JSONB,
            manager_assessment              JSONB,
            goals                           JSONB,
            feedback                        TEXT,
            development_plan                TEXT,
            promotion_recommendation        promotion_recommendation NOT NULL DEFAULT 'NONE',
            salary_increase_recommendation  NUMERIC(5,2),
            review_date                     DATE,
            due_date                        DATE NOT NULL,
            submitted_at                    TIMESTAMPTZ,
            completed_at                    TIMESTAMPTZ,
            created_at                      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at                      TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute(
        "CREATE INDEX ix_performance_reviews_employee_id ON performance_reviews(employee_id)"
    )
    op.execute(
        "CREATE INDEX ix_performance_reviews_reviewer_id ON performance_reviews(reviewer_id)"
    )
    op.execute(
        "CREATE INDEX ix_performance_reviews_cycle_id ON performance_reviews(cycle_id)"
    )

    # ── 11. goals ─────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE goals (
            id                     UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id            UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            performance_review_id  UUID REFERENCES performance_reviews(id) ON DELETE SET NULL,
            title                  VARCHAR(200) NOT NULL,
            description            TEXT,
            category               goal_category NOT NULL,
            target_value           NUMERIC(12,2),
            current_value          NUMERIC(12,2),
            measurement_unit       VARCHAR(50),
            weight                 DOUBLE PRECISION,
            due_date               DATE,
            status                 goal_status NOT NULL DEFAULT 'NOT_STARTED',
            completion_percentage  INTEGER NOT NULL DEFAULT 0,
            notes                  TEXT,
            created_at             TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at             TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_goals_employee_id ON goals(employee_id)")
    op.execute("CREATE INDEX ix_goals_status ON goals(status)")

    # ── 12. time_records ──────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE time_records (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id  UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            date         DATE NOT NULL,
            clock_in     TIMESTAMPTZ,
            clock_out    TIMESTAMPTZ,
            break_start  TIMESTAMPTZ,
            break_end    TIMESTAMPTZ,
            total_hours  NUMERIC(5,2),
            status       time_record_status NOT NULL DEFAULT 'PENDING',
            notes        TEXT,
            location     JSONB,
            approved_by  UUID REFERENCES users(id) ON DELETE SET NULL,
            approved_at  TIMESTAMPTZ,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_time_record_employee_date UNIQUE (employee_id, date)
        )
    """)
    op.execute("CREATE INDEX ix_time_records_date ON time_records(date)")
    op.execute("CREATE INDEX ix_time_records_status ON time_records(status)")

    # ── 13. expense_categories ────────────────────────────────────────────
    op.execute("""
        CREATE TABLE expense_categories (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name         VARCHAR(100) NOT NULL UNIQUE,
            description  TEXT,
            max_amount   NUMERIC(12,2),
            currency     VARCHAR(3) NOT NULL DEFAULT 'USD',
            is_active    BOOLEAN NOT NULL DEFAULT TRUE,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # ── 14. expenses ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE expenses (
            id             UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id    UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            category_id    UUID NOT NULL REFERENCES expense_categories(id),
            amount         NUMERIC(12,2) NOT NULL,
            currency       VARCHAR(3) NOT NULL DEFAULT 'USD',
            description    TEXT NOT NULL,
            date           DATE NOT NULL,
            receipt        VARCHAR(500),
            status         expense_status NOT NULL DEFAULT 'PENDING',
            comments       TEXT,
            submitted_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            approved_at    TIMESTAMPTZ,
            approved_by    UUID REFERENCES users(id) ON DELETE SET NULL,
            rejected_at    TIMESTAMPTZ,
            reimbursed_at  TIMESTAMPTZ,
            created_at     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_expenses_employee_id ON expenses(employee_id)")
    op.execute("CREATE INDEX ix_expenses_category_id ON expenses(category_id)")
    op.execute("CREATE INDEX ix_expenses_status ON expenses(status)")

    # ── 15. trainings ─────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE trainings (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            title        VARCHAR(200) NOT NULL UNIQUE,
            description  TEXT,
            type         training_type NOT NULL,
            provider     VARCHAR(200),
            duration     INTEGER,
            cost         NUMERIC(12,2),
            currency     VARCHAR(3) NOT NULL DEFAULT 'USD',
            is_required  BOOLEAN NOT NULL DEFAULT FALSE,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # ── 16. employee_trainings ────────────────────────────────────────────
    op.execute("""
        CREATE TABLE employee_trainings (
            id            UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id   UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            training_id   UUID NOT NULL REFERENCES trainings(id) ON DELETE CASCADE,
            status        training_status NOT NULL DEFAULT 'ENROLLED',
            enrolled_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            completed_at  TIMESTAMPTZ,
            score         DOUBLE PRECISION,
            CONSTRAINT uq_employee_training UNIQUE (employee_id, training_id)
        )
    """)
    op.execute(
        "CREATE INDEX ix_employee_trainings_training_id ON employee_trainings(training_id)"
    )

    # ── 17. skills ────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE skills (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name         VARCHAR(100) NOT NULL UNIQUE,
            description  TEXT,
            category     VARCHAR(100),
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_skills_category ON skills(category)")

    # ── 18. employee_skills ───────────────────────────────────────────────
    op.execute("""
        CREATE TABLE employee_skills (
            id                   UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id          UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            skill_id             UUID NOT NULL REFERENCES skills(id) ON DELETE CASCADE,
            level                skill_level NOT NULL,
            years_of_experience  INTEGER,
            certified            BOOLEAN NOT NULL DEFAULT FALSE,
            certified_at         DATE,
            expires_at           DATE,
            notes                TEXT,
            created_at           TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at           TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_employee_skill UNIQUE (employee_id, skill_id)
        )
    """)
    op.execute("CREATE INDEX ix_employee_skills_skill_id ON employee_skills(skill_id)")

    # ── 19. projects ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE projects (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name         VARCHAR(200) NOT NULL,
            description  TEXT,
            status       project_status NOT NULL DEFAULT 'PLANNING',
            priority     priority NOT NULL DEFAULT 'MEDIUM',
            start_date   DATE,
            end_date     DATE,
            budget       NUMERIC(14,2),
            currency     VARCHAR(3) NOT NULL DEFAULT 'USD',
            manager_id   UUID REFERENCES employees(id) ON DELETE SET NULL,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_projects_status ON projects(status)")

    # ── 20. teams ─────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE teams (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name         VARCHAR(200) NOT NULL UNIQUE,
            description  TEXT,
            lead_id      UUID REFERENCES employees(id) ON DELETE SET NULL,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # ── 21. project_teams ─────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE project_teams (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            project_id   UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            team_id      UUID NOT NULL REFERENCES teams(id) ON DELETE CASCADE,
            role         VARCHAR(100),
            assigned_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_project_team UNIQUE (project_id, team_id)
        )
    """)

    # ── 22. budget_items ──────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE budget_items (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            project_id   UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            description  VARCHAR(500) NOT NULL,
            category     VARCHAR(100),
            amount       NUMERIC(14,2) NOT NULL,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_budget_items_project_id ON budget_items(project_id)")

    # ── 23. documents ─────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE documents (
            id             UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id    UUID NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
            document_type  VARCHAR(100) NOT NULL,
            file_name      VARCHAR(255) NOT NULL,
            file_path      VARCHAR(1000) NOT NULL,
            file_size      BIGINT NOT NULL,
            mime_type      VARCHAR(100) NOT NULL,
            expires_at     TIMESTAMPTZ,
            is_verified    BOOLEAN NOT NULL DEFAULT FALSE,
            verified_at    TIMESTAMPTZ,
            verified_by    UUID REFERENCES users(id) ON DELETE SET NULL,
            created_at     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_documents_employee_id ON documents(employee_id)")
    op.execute("CREATE INDEX ix_documents_document_type ON documents(document_type)")

    # ── 24. policies ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE policies (
            id              UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            title           VARCHAR(200) NOT NULL,
            content         TEXT NOT NULL,
            category        VARCHAR(100) NOT NULL,
            company_id      UUID NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
            version         VARCHAR(20) NOT NULL DEFAULT '1.0',
            effective_date  DATE,
            expiry_date     DATE,
            is_active       BOOLEAN NOT NULL DEFAULT TRUE,
            created_by      UUID REFERENCES users(id) ON DELETE SET NULL,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_policies_company_id ON policies(company_id)")
    op.execute("CREATE INDEX ix_policies_category ON policies(category)")

    # ── 25. announcements ─────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE announcements (
            id            UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            title         VARCHAR(200) NOT NULL,
            content       TEXT NOT NULL,
            type          announcement_type NOT NULL DEFAULT 'GENERAL',
            priority      priority NOT NULL DEFAULT 'MEDIUM',
            status        announcement_status NOT NULL DEFAULT 'DRAFT',
            company_id    UUID NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
            created_by    UUID REFERENCES users(id) ON DELETE SET NULL,
            published_at  TIMESTAMPTZ,
            expires_at    TIMESTAMPTZ,
            created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_announcements_company_id ON announcements(company_id)")
    op.execute("CREATE INDEX ix_announcements_status ON announcements(status)")


# ---------------------------------------------------------------------------
# DOWNGRADE
# ---------------------------------------------------------------------------


def downgrade() -> None:
    # Drop tables in reverse dependency order
    tables = [
        "announcements",
        "policies",
        "documents",
        "budget_items",
        "project_teams",
        "teams",
        "projects",
        "employee_skills",
        "skills",
        "employee_trainings",
        "trainings",
        "expenses",
        "expense_categories",
        "time_records",
        "goals",
        "performance_reviews",
        "performance_cycles",
        "employee_benefits",
        "benefits",
    ]
    for t in tables:
        op.execute(f"DROP TABLE IF EXISTS {t} CASCADE")

    # Drop deferred FK before dropping employees / departments
    op.execute(
        "ALTER TABLE departments DROP CONSTRAINT IF EXISTS fk_dept_head"
    )
    op.execute("DROP TABLE IF EXISTS employees CASCADE")
    op.execute("DROP TABLE IF EXISTS departments CASCADE")
    op.execute("DROP TABLE IF EXISTS companies CASCADE")
    op.execute("DROP TABLE IF EXISTS audit_trail CASCADE")
    op.execute("DROP TABLE IF EXISTS user_sessions CASCADE")
    op.execute("DROP TABLE IF EXISTS users CASCADE")

    # Drop enum types
    for name, _ in reversed(ENUM_TYPES):
        _drop_enum(name)

    op.execute('DROP EXTENSION IF EXISTS "uuid-ossp"')

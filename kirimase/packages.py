"""Stack enumerations and the package catalog.

Every package kirimase knows how to add is described once in ``CATALOG``:
its display name, which prompt category it belongs to, the npm dependencies
it pulls in, and whether it can only be installed on top of an ORM and an
auth package.  Prompts build their choice lists from the catalog instead of
keeping parallel string lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class DBType(str, Enum):
    """Database engine family."""
    PG = "pg"
    MYSQL = "mysql"
    SQLITE = "sqlite"


class DBProvider(str, Enum):
    """Concrete driver / hosted provider for a database engine."""
    POSTGRESJS = "postgresjs"
    NODE_POSTGRES = "node-postgres"
    NEON = "neon"
    VERCEL_PG = "vercel-pg"
    SUPABASE = "supabase"
    AWS = "aws"
    PLANETSCALE = "planetscale"
    MYSQL_2 = "mysql-2"
    BETTER_SQLITE3 = "better-sqlite3"
    BUN_SQLITE = "bun-sqlite"


class ORMType(str, Enum):
    DRIZZLE = "drizzle"
    PRISMA = "prisma"


class AuthType(str, Enum):
    NEXT_AUTH = "next-auth"
    CLERK = "clerk"
    LUCIA = "lucia"
    KINDE = "kinde"


class ComponentLibType(str, Enum):
    SHADCN_UI = "shadcn-ui"


class PMType(str, Enum):
    """Package manager used to install dependencies in the target project."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"


class AvailablePackage(str, Enum):
    """Every identifier that may appear in the config's ``packages`` list."""
    DRIZZLE = "drizzle"
    PRISMA = "prisma"
    NEXT_AUTH = "next-auth"
    CLERK = "clerk"
    LUCIA = "lucia"
    KINDE = "kinde"
    SHADCN_UI = "shadcn-ui"
    TRPC = "trpc"
    STRIPE = "stripe"
    RESEND = "resend"


class AuthProvider(str, Enum):
    """OAuth providers offered when next-auth is chosen."""
    DISCORD = "discord"
    GOOGLE = "google"
    GITHUB = "github"
    APPLE = "apple"
    AUTH0 = "auth0"


class PackageCategory(str, Enum):
    ORM = "orm"
    AUTH = "auth"
    COMPONENT_LIB = "component_lib"
    MISC = "misc"


# ---------------------------------------------------------------------------
# Prompt choices
# ---------------------------------------------------------------------------

class PackageChoice(BaseModel):
    """A selectable package as shown in a prompt."""
    name: str = Field(..., description="Display name")
    value: AvailablePackage = Field(..., description="Package identifier")
    disabled: Optional[str] = Field(
        default=None, description="Reason the choice cannot be selected, if any"
    )


class ProviderChoice(BaseModel):
    """A database provider as shown in a prompt."""
    name: str
    value: DBProvider


DB_TYPE_NAMES: dict[DBType, str] = {
    DBType.PG: "Postgres",
    DBType.MYSQL: "MySQL",
    DBType.SQLITE: "SQLite",
}

DB_PROVIDERS: dict[DBType, list[ProviderChoice]] = {
    DBType.PG: [
        ProviderChoice(name="Postgres.JS", value=DBProvider.POSTGRESJS),
        ProviderChoice(name="node-postgres", value=DBProvider.NODE_POSTGRES),
        ProviderChoice(name="Neon", value=DBProvider.NEON),
        ProviderChoice(name="Vercel Postgres", value=DBProvider.VERCEL_PG),
        ProviderChoice(name="Supabase", value=DBProvider.SUPABASE),
        ProviderChoice(name="AWS Data API", value=DBProvider.AWS),
    ],
    DBType.MYSQL: [
        ProviderChoice(name="PlanetScale", value=DBProvider.PLANETSCALE),
        ProviderChoice(name="MySQL 2", value=DBProvider.MYSQL_2),
    ],
    DBType.SQLITE: [
        ProviderChoice(name="better-sqlite3", value=DBProvider.BETTER_SQLITE3),
        ProviderChoice(name="Bun SQLite", value=DBProvider.BUN_SQLITE),
    ],
}

# Driver packages pulled in alongside an ORM, keyed by provider.
DB_DRIVER_PACKAGES: dict[DBProvider, tuple[str, str]] = {
    DBProvider.POSTGRESJS: ("postgres", ""),
    DBProvider.NODE_POSTGRES: ("pg", "@types/pg"),
    DBProvider.NEON: ("@neondatabase/serverless", ""),
    DBProvider.VERCEL_PG: ("@vercel/postgres", ""),
    DBProvider.SUPABASE: ("postgres", ""),
    DBProvider.AWS: ("@aws-sdk/client-rds-data", ""),
    DBProvider.PLANETSCALE: ("@planetscale/database", ""),
    DBProvider.MYSQL_2: ("mysql2", ""),
    DBProvider.BETTER_SQLITE3: ("better-sqlite3", "@types/better-sqlite3"),
    DBProvider.BUN_SQLITE: ("", ""),
}


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PackageInfo:
    """Static metadata for one installable package."""

    id: AvailablePackage
    name: str
    category: PackageCategory
    regular: tuple[str, ...] = ()
    dev: tuple[str, ...] = ()
    requires_orm_and_auth: bool = False
    disabled_reason: str = ""
    shadcn_components: tuple[str, ...] = ()

    def choice(self, has_orm_and_auth: bool = True) -> PackageChoice:
        """Return the prompt choice, disabled when the prerequisite is unmet."""
        disabled = None
        if self.requires_orm_and_auth and not has_orm_and_auth:
            disabled = self.disabled_reason
        return PackageChoice(name=self.name, value=self.id, disabled=disabled)


CATALOG: dict[AvailablePackage, PackageInfo] = {
    info.id: info
    for info in (
        PackageInfo(
            id=AvailablePackage.DRIZZLE,
            name="Drizzle",
            category=PackageCategory.ORM,
            regular=("drizzle-orm", "drizzle-zod", "zod", "@t3-oss/env-nextjs"),
            dev=("drizzle-kit", "tsx", "dotenv"),
        ),
        PackageInfo(
            id=AvailablePackage.PRISMA,
            name="Prisma",
            category=PackageCategory.ORM,
            regular=("@prisma/client", "zod", "@t3-oss/env-nextjs"),
            dev=("prisma", "zod-prisma"),
        ),
        PackageInfo(
            id=AvailablePackage.NEXT_AUTH,
            name="Auth.js (NextAuth)",
            category=PackageCategory.AUTH,
            regular=("next-auth",),
        ),
        PackageInfo(
            id=AvailablePackage.CLERK,
            name="Clerk",
            category=PackageCategory.AUTH,
            regular=("@clerk/nextjs",),
        ),
        PackageInfo(
            id=AvailablePackage.LUCIA,
            name="Lucia",
            category=PackageCategory.AUTH,
            regular=("lucia", "oslo"),
        ),
        PackageInfo(
            id=AvailablePackage.KINDE,
            name="Kinde",
            category=PackageCategory.AUTH,
            regular=("@kinde-oss/kinde-auth-nextjs",),
        ),
        PackageInfo(
            id=AvailablePackage.SHADCN_UI,
            name="Shadcn UI (with next-themes)",
            category=PackageCategory.COMPONENT_LIB,
            regular=(
                "tailwindcss-animate",
                "class-variance-authority",
                "clsx",
                "tailwind-merge",
                "lucide-react",
                "next-themes",
            ),
            shadcn_components=("button", "sonner", "avatar", "dropdown-menu", "input", "label"),
        ),
        PackageInfo(
            id=AvailablePackage.TRPC,
            name="tRPC",
            category=PackageCategory.MISC,
            regular=(
                "@tanstack/react-query",
                "@trpc/client",
                "@trpc/react-query",
                "@trpc/server",
                "@trpc/next",
                "superjson",
                "server-only",
            ),
        ),
        PackageInfo(
            id=AvailablePackage.STRIPE,
            name="Stripe",
            category=PackageCategory.MISC,
            regular=("stripe", "@stripe/stripe-js"),
            requires_orm_and_auth=True,
            disabled_reason="(you must have an ORM and Auth to install Stripe)",
        ),
        PackageInfo(
            id=AvailablePackage.RESEND,
            name="Resend",
            category=PackageCategory.MISC,
            regular=("resend", "@react-email/components"),
        ),
    )
}


def packages_in(category: PackageCategory) -> list[PackageInfo]:
    """Return the catalog entries of *category* in declaration order."""
    return [info for info in CATALOG.values() if info.category == category]


# Database adapter an auth package needs for a given ORM.
AUTH_ADAPTERS: dict[tuple[str, str], str] = {
    ("next-auth", "drizzle"): "@auth/drizzle-adapter",
    ("next-auth", "prisma"): "@auth/prisma-adapter",
    ("lucia", "drizzle"): "@lucia-auth/adapter-drizzle",
    ("lucia", "prisma"): "@lucia-auth/adapter-prisma",
}

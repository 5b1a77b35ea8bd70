"""BíbliaFS.

Backend service for the BíbliaFS devotional Bible-reading application.

High-level architecture
-----------------------

The codebase is organized around a thin REST layer over a relational store,
plus a handful of services that hold the actual application logic:

- **Routers** (``bibliafs.server.api.v1``) validate payloads, resolve the
  authenticated user and delegate to repositories or services.
- **Repositories** (``bibliafs.core.database.repositories``) are the only
  place that builds SQL statements.
- **Services** hold behavior that is more than a single query:

  - ``bibliafs.gamification``: XP, levels, streaks and the reward transaction.
  - ``bibliafs.bible``: Bible text API client with retry and bundled fallback.
  - ``bibliafs.ai``: pydantic-ai agents for study, search, lessons and
    discussions, and the per-plan AI quota.
  - ``bibliafs.payments``: Stripe checkout, portal and webhook handling.
  - ``bibliafs.notifications``: web push delivery and the reminder scheduler.
"""

__version__ = "1.4.0"

"""Fixtures for integration tests: real services over a real SQLite store."""

from types import SimpleNamespace

import pytest

from ghmcp.application.services import (
    CredentialStore,
    CsrfTokenManager,
    MaintenanceService,
    OAuthLoginFlow,
    RateLimiter,
    SessionManager,
    UserDirectory,
    WorkflowStateTracker,
)
from ghmcp.config.rate_limits import RATE_LIMIT_RULES
from ghmcp.domain.value_objects import RateLimitConfig, RateLimitRule
from ghmcp.infrastructure.github import GitHubOAuthClient


@pytest.fixture
def rate_limit_config() -> RateLimitConfig:
    return RateLimitConfig(
        default_rule=RateLimitRule(limit=60, window_seconds=60),
        rules=dict(RATE_LIMIT_RULES),
    )


@pytest.fixture
def services(uow, encryption, audit_logger, mock_logger, clock, rate_limit_config):
    """Every component wired against the test database and the fake clock."""
    csrf = CsrfTokenManager(uow, mock_logger, clock=clock)
    sessions = SessionManager(uow, mock_logger, clock=clock)
    credentials = CredentialStore(uow, encryption, mock_logger, clock=clock)
    users = UserDirectory(uow, mock_logger, clock=clock)
    github = GitHubOAuthClient(
        client_id="Iv1.client",
        client_secret="shhh",
        redirect_uri="https://localhost:8443/auth/github/callback",
        logger=mock_logger,
    )
    return SimpleNamespace(
        csrf=csrf,
        sessions=sessions,
        credentials=credentials,
        users=users,
        audit=audit_logger,
        rate_limiter=RateLimiter(uow, rate_limit_config, mock_logger, clock=clock),
        workflow_states=WorkflowStateTracker(uow, mock_logger, clock=clock),
        maintenance=MaintenanceService(uow, audit_logger, mock_logger, clock=clock),
        oauth=OAuthLoginFlow(
            csrf=csrf,
            github=github,
            users=users,
            credentials=credentials,
            sessions=sessions,
            audit=audit_logger,
            logger=mock_logger,
            clock=clock,
        ),
    )

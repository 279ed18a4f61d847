from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import AppConfig
from core.matcher.interfaces import AuthoritativeStore, CandidateSource, DynamicContextProvider
from core.matcher.search import TypesenseCandidateSource
from database.database import build_engine, build_session_factory
from database.repositories.participant import SqlDynamicContextProvider
from database.repositories.provider import SqlAuthoritativeStore
from database.uow import care_uow


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Owns the engine and session factory; nothing is cached at module
    level. DB access should be obtained via ctx.uow() inside each
    operation.
    """
    config: AppConfig
    engine: Optional[Engine]
    session_factory: sessionmaker
    candidate_source: CandidateSource
    store: AuthoritativeStore
    context_provider: Optional[DynamicContextProvider] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        engine = build_engine(config.database)
        session_factory = build_session_factory(engine)

        return cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            candidate_source=TypesenseCandidateSource(config.search),
            store=SqlAuthoritativeStore(session_factory),
            context_provider=SqlDynamicContextProvider(session_factory),
        )

    def uow(self):
        return care_uow(self.session_factory)

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()

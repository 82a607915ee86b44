from dependency_injector import containers, providers

from ledgerview.config import Settings
from ledgerview.db.session import build_engine, build_session_factory
from ledgerview.ledger.service import LedgerService


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    ledger_service = providers.Factory(
        LedgerService,
        settings=settings,
    )

from ledgerview.config import Settings
from ledgerview.container import Container
from ledgerview.ledger.service import LedgerService


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.primary_currency_symbol == "cGLD"
        assert s.secondary_currency_symbol == "cUSD"
        assert s.excluded_call_type == "delegatecall"

    def test_database_url(self):
        s = Settings(db_user="u", db_password="p", db_host="db", db_port=1234, db_name="chain")
        assert s.database_url == "postgresql+asyncpg://u:p@db:1234/chain"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SECONDARY_CURRENCY_SYMBOL", "cEUR")
        assert Settings().secondary_currency_symbol == "cEUR"


class TestContainer:
    async def test_ledger_service_factory(self, session):
        container = Container()
        container.settings.override(Settings(primary_currency_symbol="cGLD"))

        service = container.ledger_service(session=session)

        assert isinstance(service, LedgerService)
        assert container.settings() is container.settings()

"""Configuration system using pydantic-settings with environment variable loading."""

from dataclasses import dataclass
from decimal import Decimal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class HyperliquidSettings(BaseSettings):
    """Hyperliquid vault and info API settings."""

    model_config = SettingsConfigDict(env_prefix="HYPERLIQUID_")

    testnet: bool = False
    vault_address: str = "0xdfc24b077bc1425ad1dea75bcb6f8158e10df303"
    query_user: str = ZERO_ADDRESS  # dummy caller, vault data is public
    vault_url: str = (
        "https://app.hyperliquid.xyz/vaults/0xdfc24b077bc1425ad1dea75bcb6f8158e10df303"
    )
    supported_asset: str = "USDC"
    fallback_apr: Decimal = Decimal("7.29")  # percent
    fallback_tvl: Decimal = Decimal("350000000")


class LighterSettings(BaseSettings):
    """Lighter public pool settings. Yields are mock data until a live source exists."""

    model_config = SettingsConfigDict(env_prefix="LIGHTER_")

    vault_url: str = "https://app.lighter.xyz/public-pools/281474976710654"
    supported_asset: str = "USDC"
    mock_current: Decimal = Decimal("10.2")
    mock_tvl: Decimal = Decimal("5000000")
    mock_periods: dict[str, Decimal] = {
        "24h": Decimal("12.5"),
        "7d": Decimal("8.2"),
        "1m": Decimal("15.3"),
        "3m": Decimal("45.0"),
        "6m": Decimal("89.2"),
        "1y": Decimal("200.5"),
        "all-time": Decimal("450.1"),
    }


class VolumeSettings(BaseSettings):
    """24h volume sources and per-venue fallback constants (USD)."""

    model_config = SettingsConfigDict(env_prefix="VOLUME_")

    live_enabled: bool = True
    hyperliquid_fallback: Decimal = Decimal("10500000000")  # $10.5B
    lighter_fallback: Decimal = Decimal("6180000000")  # $6.18B


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    poll_interval: int = 60  # seconds between upstream refreshes
    client_refresh_interval: int = 30  # seconds between htmx table polls
    default_periods: list[str] = ["24h", "7d", "1m"]
    max_selected_periods: int = 3


class ChainDefinition(BaseModel):
    """EVM chain description handed to the browser wallet provider."""

    id: int
    name: str
    currency_symbol: str
    currency_decimals: int = 18
    rpc_url: str
    explorer_url: str
    testnet: bool = False


class WalletSettings(BaseSettings):
    """Chains offered by the wallet-connection widget."""

    model_config = SettingsConfigDict(env_prefix="WALLET_")

    chains: list[ChainDefinition] = [
        ChainDefinition(
            id=42161,
            name="Arbitrum One",
            currency_symbol="ETH",
            rpc_url="https://arb1.arbitrum.io/rpc",
            explorer_url="https://arbiscan.io",
        ),
        ChainDefinition(
            id=31337,
            name="Hyperliquid Testnet",
            currency_symbol="USDC",
            currency_decimals=6,
            rpc_url="https://api.hyperliquid.xyz/rpc",
            explorer_url="https://explorer.hyperliquid.xyz",
            testnet=True,
        ),
    ]


@dataclass(frozen=True)
class VenueConfig:
    """Immutable per-venue metadata built once at startup and passed to adapters."""

    name: str
    vault_url: str
    supported_asset: str
    fallback_volume: Decimal
    live_volume: bool


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # "json" for machine-readable lines
    hyperliquid: HyperliquidSettings = HyperliquidSettings()
    lighter: LighterSettings = LighterSettings()
    volume: VolumeSettings = VolumeSettings()
    dashboard: DashboardSettings = DashboardSettings()
    wallet: WalletSettings = WalletSettings()

    def venues(self) -> tuple[VenueConfig, ...]:
        """Return the tracked venues in display order."""
        return (
            VenueConfig(
                name="Hyperliquid",
                vault_url=self.hyperliquid.vault_url,
                supported_asset=self.hyperliquid.supported_asset,
                fallback_volume=self.volume.hyperliquid_fallback,
                live_volume=self.volume.live_enabled,
            ),
            VenueConfig(
                name="Lighter",
                vault_url=self.lighter.vault_url,
                supported_asset=self.lighter.supported_asset,
                fallback_volume=self.volume.lighter_fallback,
                live_volume=False,  # no public volume source yet
            ),
        )

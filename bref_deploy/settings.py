"""Tool settings for bref-deploy.

Settings are loaded from environment variables prefixed with ``BREF_`` and
from a ``.env`` file in the current directory via pydantic-settings.

Environment variables:
    BREF_PHP_VERSION: PHP runtime version to download and cache
    BREF_PHP_DOWNLOAD_URL: Default runtime archive URL, ``{version}`` is substituted
    BREF_SERVERLESS_BINARY: Serverless Framework executable
    BREF_COMPOSER_BINARY: Composer executable
    BREF_NOTIFICATIONS: Send a desktop notification after a deployment

Example:
    >>> from bref_deploy.settings import settings
    >>> settings.runtime_url
    'https://s3.amazonaws.com/bref-php/bin/php-7.2.5.tar.gz'

Note:
    Settings are loaded once at module import and frozen. Components accept an
    explicit Settings instance so tests can run with their own values.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration of the external tools and runtime used by the pipeline.

    Attributes:
        php_version: Runtime version, used both for the cache file name and
                     the default download URL.

        php_download_url: URL template of the runtime archive. Overridden per
                          project by the ``php`` key of ``.bref.yml``.

        serverless_binary: Executable used for ``deploy`` and ``invoke local``.

        composer_binary: Executable used to install the project dependencies.

        notifications: Whether a successful deployment triggers a desktop
                       notification.
    """

    model_config = SettingsConfigDict(
        env_prefix="BREF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    php_version: str = "7.2.5"
    php_download_url: str = "https://s3.amazonaws.com/bref-php/bin/php-{version}.tar.gz"

    serverless_binary: str = "serverless"
    composer_binary: str = "composer"

    notifications: bool = True

    @property
    def runtime_url(self) -> str:
        """Default download URL for the configured PHP version."""
        return self.php_download_url.format(version=self.php_version)


settings = Settings()
"""Global settings instance used when no explicit Settings is given."""

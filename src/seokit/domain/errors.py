class SeoAppError(Exception):
    """Base error for the SEO toolkit."""


class ConfigError(SeoAppError):
    pass


class ContentParseError(SeoAppError):
    pass


class SitemapWriteError(SeoAppError):
    pass

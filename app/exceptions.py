"""
Exception classes for the restaurant discovery pipeline.

Each error carries an HTTP status and a stable caller-facing message.
Internal detail (raw provider bodies, stack traces) goes to the log only.
"""


class DiscoveryError(Exception):
    """Base exception for the discovery service"""
    status_code = 500
    kind = "internal_error"
    public_message = "Something went wrong. Please try again."


class ConfigurationError(DiscoveryError):
    """Server is missing required configuration (e.g. provider credential)"""
    kind = "configuration_error"
    public_message = "Service is temporarily unavailable."


class RateLimited(DiscoveryError):
    """Client exceeded its request budget"""
    status_code = 429
    kind = "rate_limited"
    public_message = "Too many requests. Please slow down and try again shortly."


class UpstreamError(DiscoveryError):
    """Places provider returned a failure status"""
    status_code = 502
    kind = "upstream_error"
    public_message = "Could not reach the places provider. Please try again."


class NotFound(DiscoveryError):
    """No candidates found, or none survived filtering"""
    status_code = 404
    kind = "not_found"
    public_message = (
        "No restaurants found matching your criteria. "
        "Try increasing the distance or relaxing your filters."
    )

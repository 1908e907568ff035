# src/template_router/policy.py
"""Decide whether a route's certificates should be written to disk."""

import logging

from .models import ServiceAliasConfig, TLSTermination

logger = logging.getLogger(__name__)

TERMINATED = (TLSTermination.EDGE, TLSTermination.REENCRYPT)


def has_required_edge_certs(cfg: ServiceAliasConfig) -> bool:
    """True if the host certificate has both contents and a private key.

    A CA cert is not required: it may already be in the root chain.
    """
    host_cert = cfg.host_certificate
    return host_cert is not None and bool(host_cert.contents) and bool(host_cert.private_key)


def should_write_certificates(
    cfg: ServiceAliasConfig,
    default_certificate_configured: bool = False,
) -> bool:
    """Return True if an edge/reencrypt route has a complete host certificate.

    When the host certificate or key is missing the route is still written
    to config, just without certificates. With a default certificate
    configured the route is assumed to rely on it (wildcard), so this is
    logged at INFO; otherwise it is a WARNING.
    """
    if cfg.tls_termination not in TERMINATED:
        return False
    if cfg.certificates is None:
        return False
    if has_required_edge_certs(cfg):
        return True

    msg = (
        "a %s terminated route with host %s does not have the required certificates. "
        "The route will still be created but no certificates will be written"
    )
    level = logging.INFO if default_certificate_configured else logging.WARNING
    logger.log(level, msg, cfg.tls_termination.value, cfg.host)
    return False

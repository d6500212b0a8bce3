# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-address probing with a Host-header override."""

from __future__ import annotations

import logging

from ..config import RunConfiguration
from ..errors import BaselineError, ErrorCategory, error_category_to_reason
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..models import BaselineResponse, ProbeOutcome, ProbeStatus, TargetDescriptor
from ..similarity import SimilarityScorer

logger = logging.getLogger(__name__)


def classify(response: HttpResponse, config: RunConfiguration) -> ProbeStatus:
    """Map a response onto the outcome taxonomy."""
    if not response.ok or response.status_code is None:
        if response.error_category is ErrorCategory.TIMEOUT:
            return ProbeStatus.TIMEOUT
        return ProbeStatus.TRANSPORT_ERROR
    if config.accepts(response.status_code):
        return ProbeStatus.SUCCESS
    return ProbeStatus.REJECTED_STATUS


def _failure_reason(response: HttpResponse, status: ProbeStatus) -> str:
    if status is ProbeStatus.REJECTED_STATUS:
        return f"server error: status {response.status_code}"
    reason = error_category_to_reason(response.error_category)
    detail = response.error_message or ""
    if reason and detail:
        return f"{reason}: {detail}"
    return reason or detail or "unknown error"


class OriginProbe:
    """
    Issues one GET per candidate address while presenting the target's virtual host.

    The connection goes straight to the candidate; the ``Host`` header (and SNI for
    https) carry the target's hostname so an origin configured for that name answers
    as it would behind the WAF/CDN edge.
    """

    def __init__(self, http_client: HttpClient, config: RunConfiguration, *, send_sni: bool = True):
        self.http_client = http_client
        self.config = config
        self.send_sni = send_sni

    def _headers(self, target: TargetDescriptor) -> dict[str, str]:
        headers = {"Host": target.virtual_host}
        if self.config.cookie:
            headers["Cookie"] = self.config.cookie
        return headers

    def _request(self, url: str, target: TargetDescriptor, *, allow_redirects: bool | None = None) -> HttpResponse:
        request = HttpRequest(
            url=url,
            headers=self._headers(target),
            timeout=self.config.timeout,
            allow_redirects=allow_redirects,
            sni_hostname=target.hostname if self.send_sni and target.uses_tls else None,
        )
        return self.http_client.request(request)

    def fetch_baseline(self, target: TargetDescriptor) -> BaselineResponse:
        """Fetch the target through its normal path, following redirects. Any failure here is fatal for the run."""
        response = self._request(target.url, target, allow_redirects=True)
        status = classify(response, self.config)
        if status is not ProbeStatus.SUCCESS:
            raise BaselineError(f"baseline request to {target.url} failed: {_failure_reason(response, status)}")
        logger.info("Baseline %s answered %s with %d bytes", target.url, response.status_code, len(response.content))
        if response.meta.get("body_truncated"):
            logger.warning("Baseline body truncated at %d bytes; scores use the truncated text", len(response.content))
        return BaselineResponse(url=target.url, status_code=int(response.status_code or 0), body=response.text)

    def probe(self, address: str, target: TargetDescriptor, scorer: SimilarityScorer | None = None) -> ProbeOutcome:
        """Probe one candidate. Never raises for network problems; failures come back as outcomes."""
        response = self._request(target.url_for(address), target)
        status = classify(response, self.config)
        if status is not ProbeStatus.SUCCESS:
            reason = _failure_reason(response, status)
            logger.debug("%s: %s (%s)", address, status.value, reason)
            return ProbeOutcome(
                address=address,
                status=status,
                status_code=response.status_code,
                error_message=reason,
            )

        similarity = scorer.score(response.text) if scorer is not None else 0.0
        return ProbeOutcome(
            address=address,
            status=status,
            similarity=similarity,
            status_code=response.status_code,
        )

"""LlmStyleCheck: the per-file reconciliation driver.

For each file: build the prompt, get a reply (cache first, then the
backend), parse it into findings, and log one diagnostic per finding
at the most precise location that can be resolved.
"""

from __future__ import annotations

import logging

from llmcheck.adapters.base import BackendConfig, LLMClient
from llmcheck.adapters.factory import create_client
from llmcheck.config import Settings
from llmcheck.host.reporter import Diagnostic, DiagnosticReporter
from llmcheck.host.tree import SyntaxNode
from llmcheck.prompts import build_prompt, load_prompt_template, split_source_lines
from llmcheck.reconcile.findings import Finding, parse_reply
from llmcheck.reconcile.locations import LocationResolver
from llmcheck.reconcile.messages import MessageFormatter
from llmcheck.resilience.errors import classify_error
from llmcheck.resilience.response_cache import ResponseCache, prompt_hash

logger = logging.getLogger(__name__)


class LlmStyleCheck:
    """Runs the model over one file at a time.

    The backend client is built from ``settings`` unless one is passed
    in; an endpoint no provider recognises raises
    :class:`~llmcheck.adapters.base.UnsupportedEndpointError` here,
    before any file is read.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        client: LLMClient | None = None,
        cache: ResponseCache | None = None,
        template: str | None = None,
    ) -> None:
        self.settings = settings
        if client is None and settings.enabled:
            client = create_client(BackendConfig.from_settings(settings))
        self.client = client
        self.cache = cache if cache is not None else ResponseCache(settings.cache_dir)
        self.template = (
            template
            if template is not None
            else load_prompt_template(settings.prompt_template_path)
        )
        self.formatter = MessageFormatter()
        # SourceIndex: lines of the file being checked, None between files
        self._source_lines: list[str] | None = None

    def check_file(
        self,
        file_path: str,
        source: str,
        root: SyntaxNode | None,
        reporter: DiagnosticReporter,
    ) -> list[Diagnostic]:
        """Check one file and return the diagnostics it produced.

        Never raises: any failure is logged and the file counts as
        having no findings (diagnostics already logged for it are
        withdrawn).
        """
        if not self.settings.enabled or self.client is None:
            return []

        emitted_before = len(reporter.diagnostics)
        try:
            self._source_lines = split_source_lines(source)
            reply = self.fetch_reply(build_prompt(source, self.template))
            if reply is not None and reply.strip():
                self.reconcile(reply, root, reporter)
        except Exception:  # noqa: BLE001
            logger.exception("event=check_failed file=%s", file_path)
            del reporter.diagnostics[emitted_before:]
        finally:
            self._source_lines = None
        return reporter.diagnostics[emitted_before:]

    def fetch_reply(self, prompt: str) -> str | None:
        """Cached reply for ``prompt``, else a fresh backend reply.

        A backend failure or a None reply is logged and yields None.
        Any non-None reply is cached, including an empty one (a clean
        file).
        """
        if self.client is None:
            return None
        key = prompt_hash(prompt)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("event=cache_hit key=%s", key)
            return cached

        try:
            reply = self.client.generate_response(prompt)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "event=backend_call_failed error_class=%s error=%s",
                classify_error(exc).value,
                exc,
            )
            return None
        if reply is None:
            logger.warning("event=backend_no_reply key=%s", key)
            return None
        self.cache.put(key, reply)
        return reply

    def reconcile(
        self,
        reply: str,
        root: SyntaxNode | None,
        reporter: DiagnosticReporter,
    ) -> None:
        """Parse ``reply`` and log one diagnostic per finding."""
        resolver = LocationResolver(
            self._source_lines or [],
            tab_width=self.settings.tab_width,
            column_offset=self.settings.column_offset,
        )
        findings = parse_reply(reply, show_warnings=self.settings.show_warnings)
        logger.info(
            "event=reply_parsed file=%s findings=%d",
            reporter.file_path,
            len(findings),
        )
        for finding in findings:
            self._emit(finding, root, resolver, reporter)

    def _emit(
        self,
        finding: Finding,
        root: SyntaxNode | None,
        resolver: LocationResolver,
        reporter: DiagnosticReporter,
    ) -> Diagnostic:
        location = resolver.resolve(
            root, finding.target_line, finding.identifier_hint
        )
        source_line = (
            resolver.line_text(finding.target_line)
            if finding.target_line is not None
            else ""
        )
        message = self.formatter.format(finding, source_line)
        return reporter.log(
            finding.severity,
            message.template,
            *message.args,
            node=location.node,
            line=location.line,
            column=location.column,
        )

    def close(self) -> None:
        """Release the backend client's connection pool, if it has one."""
        close = getattr(self.client, "close", None)
        if callable(close):
            close()

"""Machine translation with an ordered fallback chain of backends."""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import structlog

from i18n_editor.key_resolver import TranslationRecord
from i18n_editor.providers.base import TranslationBackend
from i18n_editor.run_logging import RunLogger

logger = structlog.get_logger()


class EmptyTranslationError(Exception):
    """A backend answered without a usable translation."""

    def __init__(self, backend: str):
        super().__init__(f"{backend}: empty translation result")
        self.backend = backend


class AllBackendsFailedError(Exception):
    """
    Every backend failed to translate a text.

    Attributes:
        errors: One exception per backend, in the order they were tried
        backends: Names of the backends that were tried
    """

    def __init__(self, errors: List[Exception], backends: List[str]):
        if errors:
            details = "; ".join(str(e) for e in errors)
        else:
            details = "no translation backends configured"
        super().__init__(f"All translation backends failed: {details}")
        self.errors = errors
        self.backends = backends


class Translator:
    """
    Translates source-locale values into other locales.

    Args:
        backends: Backends in the order they are tried
        source_locale: Locale whose values are translated
        max_workers: Concurrent translations in a batch
        run_logger: Optional RunLogger recording every attempt
    """

    def __init__(
        self,
        backends: Sequence[TranslationBackend],
        source_locale: str,
        max_workers: int = 4,
        run_logger: Optional[RunLogger] = None
    ):
        self.backends = list(backends)
        self.source_locale = source_locale
        self.max_workers = max_workers
        self.run_logger = run_logger

    def translate(
        self,
        text: str,
        to_locale: str,
        from_locale: Optional[str] = None
    ) -> str:
        """
        Translate text, falling through the backends until one succeeds.

        Args:
            text: Source text
            to_locale: Target locale code
            from_locale: Source locale code (default: the configured source locale)

        Returns:
            The first item of the first non-empty backend result

        Raises:
            AllBackendsFailedError: With every backend's error, in order
        """
        from_locale = from_locale or self.source_locale
        errors: List[Exception] = []
        tried: List[str] = []

        if self.run_logger:
            self.run_logger.log_request(to_locale, text)

        for backend in self.backends:
            tried.append(backend.name)
            try:
                result = backend.translate(text, from_locale, to_locale)
                if not result or not result[0]:
                    raise EmptyTranslationError(backend.name)
            except Exception as e:
                errors.append(e)
                logger.debug(
                    "backend_failed",
                    backend=backend.name,
                    locale=to_locale,
                    error=str(e),
                )
                if self.run_logger:
                    self.run_logger.log_failure(
                        to_locale, "backend_error", str(e), {"backend": backend.name}
                    )
                continue

            if self.run_logger:
                self.run_logger.log_response(to_locale, backend.name, result[0])
            return result[0]

        raise AllBackendsFailedError(errors, tried)

    def _translate_record(self, record: TranslationRecord, source_text: str) -> TranslationRecord:
        try:
            record.value = self.translate(
                source_text, to_locale=record.locale_code, from_locale=self.source_locale
            )
        except AllBackendsFailedError as e:
            logger.warning(
                "translation_failed",
                key=record.full_key,
                locale=record.locale_code,
                backends=e.backends,
                errors=[str(err) for err in e.errors],
            )
            if self.run_logger:
                self.run_logger.log_failure(
                    record.locale_code,
                    "all_backends_failed",
                    str(e),
                    {"key": record.full_key, "backends": e.backends},
                )
        return record

    def translate_batch(self, records: List[TranslationRecord]) -> List[TranslationRecord]:
        """
        Fill every non-source record with a translation of the source value.

        Locales are translated concurrently. A locale whose translation fails
        keeps its previous value; the batch itself never fails.

        Args:
            records: Records of one key across locales

        Returns:
            The same records, in input order
        """
        source = next(
            (record for record in records if record.locale_code == self.source_locale),
            None,
        )
        if source is None:
            logger.warning("source_locale_missing", source_locale=self.source_locale)
            return records
        if not isinstance(source.value, str) or not source.value:
            logger.warning(
                "source_value_not_translatable",
                key=source.full_key,
                value_type=type(source.value).__name__,
            )
            return records

        targets = [record for record in records if record is not source]
        if targets:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                list(executor.map(
                    lambda record: self._translate_record(record, source.value),
                    targets,
                ))

        return records

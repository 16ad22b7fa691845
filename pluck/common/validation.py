"""Pydantic model checks for scraped records.

Field maps are plain dicts, so nothing stops a scraper from producing a
record with a missing or misspelt field. These helpers tie a field map to
a pydantic model:

- :func:`check_fields` compares field-map keys with the model's fields
  when the scraper is built.
- :func:`validated` wraps a record scraper so each record is validated
  into a model instance.
- :class:`DeferredValidation` holds raw data until ``confirm()`` is called,
  for records assembled from several scrapers.

Example::

    class Article(BaseModel):
        title: str
        comments: int

    article = validated(
        Article,
        scrape.section("article", check_fields(Article, {
            "title": scrape.text("h1"),
            "comments": scrape.int_(".comment-count"),
        })),
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from pluck.common.exceptions import (
    DataFormatAssumptionException,
    ScraperConfigurationException,
)
from pluck.common.page_element import PageElement
from pluck.data_types import FieldMap

M = TypeVar("M", bound=BaseModel)
F = TypeVar("F", bound=FieldMap)


def check_fields(model: type[BaseModel], fields: F, partial: bool = False) -> F:
    """Check that a field map's keys match a model's fields.

    Fields are compared by name; aliases are not considered.

    Args:
        model: The pydantic model the record must satisfy.
        fields: The field map to check.
        partial: Allow the field map to cover only some of the model's
            fields, as in one position of a ``tuple_``.

    Returns:
        ``fields``, unchanged.

    Raises:
        ScraperConfigurationException: If the field map declares a field
            the model doesn't have, or (unless ``partial``) omits one.
    """
    declared = set(fields)
    expected = set(model.model_fields)

    unknown = sorted(declared - expected)
    missing = [] if partial else sorted(expected - declared)

    if unknown or missing:
        raise ScraperConfigurationException(
            f"Field map doesn't match model '{model.__name__}'",
            {"unknown": unknown, "missing": missing},
        )

    return fields


class DeferredValidation(Generic[M]):
    """Wrapper for unvalidated data that validates on confirm().

    Example:
        deferred = DeferredValidation(Article, **header_scraper(page))
        deferred.update(body_scraper(page) or {})
        article = deferred.confirm()  # Raises if invalid
    """

    def __init__(
        self,
        model_class: type[M],
        request_url: str = "",
        **data: Any,
    ) -> None:
        """Initialize deferred validation.

        Args:
            model_class: The pydantic model class to validate against.
            request_url: Optional URL for error reporting.
            **data: Raw field values (not validated).
        """
        self._model_class = model_class
        self._request_url = request_url
        self._data = data

    def update(self, data: dict[str, Any]) -> None:
        """Merge more raw fields in, overwriting existing keys."""
        self._data.update(data)

    def confirm(self) -> M:
        """Validate the data and return the validated model instance.

        Raises:
            DataFormatAssumptionException: If validation fails.
        """
        try:
            return self._model_class.model_validate(self._data)
        except ValidationError as e:
            errors_list = [dict(err) for err in e.errors()]
            raise DataFormatAssumptionException(
                errors=errors_list,
                failed_doc=self._data,
                model_name=self._model_class.__name__,
                request_url=self._request_url,
            ) from e

    @property
    def raw_data(self) -> dict[str, Any]:
        """A copy of the raw unvalidated data."""
        return self._data.copy()

    @property
    def model_name(self) -> str:
        """The pydantic model class name."""
        return self._model_class.__name__


def validated(
    model: type[M],
    scraper: Callable[[PageElement], dict[str, Any] | None],
    request_url: str = "",
) -> Callable[[PageElement], M | None]:
    """Validate the records a scraper produces against a model.

    Args:
        model: The pydantic model to validate into.
        scraper: A scraper returning a dict, or None when absent.
        request_url: Optional URL for error reporting.

    Returns:
        A scraper returning a model instance, or None when ``scraper``
        returns None.

    Raises:
        DataFormatAssumptionException: From the returned scraper, when a
            record fails validation.
    """

    def scrape_validated(context: PageElement) -> M | None:
        record = scraper(context)
        if record is None:
            return None
        deferred = DeferredValidation(model, request_url)
        deferred.update(record)
        return deferred.confirm()

    return scrape_validated

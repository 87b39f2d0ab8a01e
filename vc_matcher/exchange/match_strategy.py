"""Strategies deciding which held credentials satisfy a presentation definition."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence, Union

from .pres_exch import PresentationDefinition
from .type_filter import extract_type_filters, matches

LOGGER = logging.getLogger(__name__)

PresentationDefinitionLike = Union[PresentationDefinition, Mapping]


class BasePresentationDefinitionMatchStrategy(ABC):
    """Base class for presentation definition match strategies."""

    @abstractmethod
    def match(
        self,
        credentials: Sequence[Any],
        presentation_definition: PresentationDefinitionLike,
    ) -> Sequence[Any]:
        """Return the credentials that satisfy a presentation definition.

        Credentials expose a `parsed_document`, or are claim documents
        themselves. The result keeps the order of `credentials`.

        :params credentials: held credentials to consider
        :params presentation_definition: the verifier's request
        :returns Sequence: the matching credentials
        :raises PresentationDefinitionError: if the definition is malformed
        """


class FilterPresentationDefinitionMatchStrategy(
    BasePresentationDefinitionMatchStrategy
):
    """Match credentials by the type filters of each input descriptor.

    Only constraint fields whose path mentions `type` and schema references
    are considered; each input descriptor is an alternative way to qualify.
    """

    def match(
        self,
        credentials: Sequence[Any],
        presentation_definition: PresentationDefinitionLike,
    ) -> Sequence[Any]:
        """Return the credentials matching any input descriptor's type filters."""
        filter_groups = extract_type_filters(presentation_definition)

        result = []
        for credential in credentials:
            try:
                applicable = matches(credential, filter_groups)
            except (KeyError, IndexError, TypeError, ValueError) as err:
                LOGGER.debug("Credential %r skipped: %s", credential, err)
                applicable = False
            if applicable:
                result.append(credential)

        LOGGER.debug(
            "%d credential(s) match %d filter group(s)",
            len(result),
            len(filter_groups),
        )
        return result

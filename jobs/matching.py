"""
Jobs app matching

Matches a job seeker's saved preferences against job postings.

Two passes are made over the postings:
- strict: category AND location must match
- flex: category OR location, ranked by a weighted score

The flex pass only runs when the strict pass finds nothing and the caller
allows it, so a result never carries both lists.
"""
from __future__ import annotations

import logging
import operator
import re
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, List, Optional, Set, Union

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Q
from django.db.models.functions import Lower, Trim

from .models import Category, JobPosting, JobPreference, normalize_location

logger = logging.getLogger(__name__)


DEFAULT_LIMIT = 50
MAX_LIMIT = 200

CATEGORY_ID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE,
)


class JobMatchError(Exception):
    """
    Raised when matching fails because of a storage error.
    """


@dataclass(frozen=True)
class CategoryId:
    """A preference value that references a Category by primary key."""

    value: str


@dataclass(frozen=True)
class CategoryName:
    """A preference value that names a Category and needs resolving."""

    value: str


CategoryRef = Union[CategoryId, CategoryName]


def parse_category_ref(raw) -> Optional[CategoryRef]:
    """
    Classify a raw preferred category value by its shape.

    Canonical UUID text is always an identifier, even when no such
    category exists. Anything else non-blank is a name.
    """
    text = str(raw).strip() if raw is not None else ''
    if not text:
        return None
    if CATEGORY_ID_PATTERN.match(text):
        return CategoryId(text.lower())
    return CategoryName(text)


def clamp_limit(value) -> int:
    """
    Turn a caller supplied limit into a usable row count.

    Missing, non-numeric and non-positive values fall back to the default;
    anything above the cap is clamped to it.
    """
    default = getattr(settings, 'JOB_MATCH_DEFAULT_LIMIT', DEFAULT_LIMIT)
    maximum = getattr(settings, 'JOB_MATCH_MAX_LIMIT', MAX_LIMIT)
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    if limit <= 0:
        return default
    return min(limit, maximum)


@dataclass
class MatchResult:
    """
    Outcome of a preference match.
    """

    strict: List[JobPosting] = field(default_factory=list)
    flex: List[JobPosting] = field(default_factory=list)
    used_preferences: List[JobPreference] = field(default_factory=list)


class PreferenceMatcher:
    """
    Match job postings against every preference a user has saved.
    """

    CATEGORY_WEIGHT = 2
    LOCATION_WEIGHT = 1

    def match(self, user_id, limit=None, allow_flex: bool = True) -> MatchResult:
        """
        Find postings for a user's preferences.

        Args:
            user_id: Owner of the preferences
            limit: Maximum rows to return, see clamp_limit()
            allow_flex: Run the loose pass when the strict one is empty

        Returns:
            MatchResult with at most one of strict/flex populated

        Raises:
            JobMatchError: If the database fails at any step
        """
        limit = clamp_limit(limit)
        try:
            return self._match(user_id, limit, allow_flex)
        except DatabaseError as exc:
            logger.exception("Job match failed for user %s", user_id)
            raise JobMatchError("Failed to match jobs") from exc

    def _match(self, user_id, limit: int, allow_flex: bool) -> MatchResult:
        preferences = list(
            JobPreference.objects.filter(user_id=user_id).order_by('-created_at')
        )
        if not preferences:
            return MatchResult()

        locations = self.collect_locations(preferences)
        category_ids = self.resolve_category_ids(preferences) if locations else set()
        if not locations or not category_ids:
            logger.info(
                "No usable match signal for user %s (%d locations, %d categories)",
                user_id, len(locations), len(category_ids),
            )
            return MatchResult()

        category_filter = Q(category_id__in=sorted(category_ids))
        location_filter = self.location_filter(locations)

        strict = list(self._postings(category_filter & location_filter)[:limit])
        if strict or not allow_flex:
            return MatchResult(strict=strict, used_preferences=preferences)

        # Over-fetch so that dropping zero scores can still fill the page.
        candidates = list(self._postings(category_filter | location_filter)[:limit * 2])
        flex = self.rank(candidates, category_ids, locations)[:limit]
        return MatchResult(flex=flex, used_preferences=preferences)

    @staticmethod
    def _postings(condition: Q):
        return (
            JobPosting.objects
            .annotate(raw_location_key=Lower(Trim('location')))
            .filter(condition)
            .select_related('category')
            .order_by('-created_at')
        )

    @staticmethod
    def collect_locations(preferences: Iterable[JobPreference]) -> Set[str]:
        locations = {normalize_location(pref.preferred_location) for pref in preferences}
        locations.discard('')
        return locations

    @staticmethod
    def category_refs(preferences: Iterable[JobPreference]) -> List[CategoryRef]:
        refs = []
        for pref in preferences:
            values = pref.preferred_categories or []
            if isinstance(values, str):
                values = [values]
            for raw in values:
                ref = parse_category_ref(raw)
                if ref is not None:
                    refs.append(ref)
        return refs

    def resolve_category_ids(self, preferences: Iterable[JobPreference]) -> Set[str]:
        """
        Union of direct category ids and ids resolved from names.

        Names are matched case-insensitively against the whole category name.
        """
        refs = self.category_refs(preferences)
        category_ids = {ref.value for ref in refs if isinstance(ref, CategoryId)}
        names = {ref.value.lower(): ref.value for ref in refs if isinstance(ref, CategoryName)}

        if names:
            name_filter = reduce(operator.or_, (Q(name__iexact=name) for name in names.values()))
            resolved = Category.objects.filter(name_filter).values_list('pk', flat=True)
            category_ids.update(str(pk) for pk in resolved)
        return category_ids

    @staticmethod
    def location_filter(locations: Set[str]) -> Q:
        """
        Postings whose normalized location is preferred, falling back to a
        trimmed, case-insensitive comparison of the raw location when the
        normalized copy is missing. Expects the raw_location_key annotation
        added by _postings().
        """
        missing_lower = Q(location_lower__isnull=True) | Q(location_lower='')
        raw_match = Q(raw_location_key__in=sorted(locations))
        return Q(location_lower__in=sorted(locations)) | (missing_lower & raw_match)

    @staticmethod
    def location_matches(posting: JobPosting, locations: Set[str]) -> bool:
        if posting.location_lower:
            return posting.location_lower in locations
        return normalize_location(posting.location) in locations

    def score(self, posting: JobPosting, category_ids: Set[str], locations: Set[str]) -> int:
        score = 0
        if str(posting.category_id) in category_ids:
            score += self.CATEGORY_WEIGHT
        if self.location_matches(posting, locations):
            score += self.LOCATION_WEIGHT
        return score

    def rank(self, candidates: List[JobPosting], category_ids: Set[str],
             locations: Set[str]) -> List[JobPosting]:
        """
        Score candidates, drop non-matches, order by score then recency.

        Each returned posting carries its score as ``match_score``.
        """
        ranked = []
        for posting in candidates:
            posting.match_score = self.score(posting, category_ids, locations)
            if posting.match_score > 0:
                ranked.append(posting)
        ranked.sort(key=lambda posting: (posting.match_score, posting.created_at), reverse=True)
        return ranked

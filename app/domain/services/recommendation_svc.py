# app/domain/services/recommendation_svc.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence
import asyncio
import logging
import random
import time

from app.domain.errors import CollaboratorUnreachableError, MalformedResponseError
from app.domain.models.product import Product, RecommendationResult
from app.domain.services.constants import (
    RECO_LIMIT,
    MSG_AI, MSG_CATEGORY, MSG_RANDOM, MSG_POPULAR,
    MSG_AI_NOT_CONFIGURED, MSG_DB_NOT_AVAILABLE, MSG_DB_CONNECTION_FAILED,
    MSG_NO_PRODUCTS, MSG_SERVICE_UNAVAILABLE,
)
from app.domain.services.static_catalog import DEMO_PRODUCTS, SERVICE_FALLBACK_PRODUCTS

logger = logging.getLogger(__name__)


class Ranker(Protocol):
    async def rank(self, interacted: Sequence[Product], catalog: Sequence[Product], limit: int) -> List[str]: ...


@dataclass
class ResolveContext:
    """Per-request state filled in by the steps as the chain advances."""
    user_id: str
    catalog: List[Product] = field(default_factory=list)
    interacted_ids: List[str] = field(default_factory=list)

    @property
    def interacted(self) -> List[Product]:
        ids = set(self.interacted_ids)
        return [p for p in self.catalog if p.product_id in ids]


# A step returns a terminal result, or None to hand over to the next one
Step = Callable[[ResolveContext], Awaitable[Optional[RecommendationResult]]]


def _static(message: str) -> RecommendationResult:
    return RecommendationResult(recommendations=DEMO_PRODUCTS, message=message, is_demo_mode=True)


class RecommendationResolver:
    """
    Resolve up to 4 recommendations for a user by walking an ordered chain:

      1) AI configured?           no  -> static demo list
      2) catalog reachable/non-empty? no -> static demo list
      3) user history (orders + wishlist); none -> first catalog products
      4) AI ranking
      4a) same-category products not yet seen
      4b) random catalog products
      5) static demo list

    Collaborators are injected; `None` means unavailable. Every collaborator
    failure degrades to the next step and `resolve` never raises.
    Step 4b is random, so its results differ between calls.
    """

    def __init__(
        self,
        *,
        products=None,
        orders=None,
        wishlist=None,
        ranker: Optional[Ranker] = None,
        limit: int = RECO_LIMIT,
        ai_timeout_s: float = 8.0,
        rng: Optional[random.Random] = None,
    ):
        self.products = products
        self.orders = orders
        self.wishlist = wishlist
        self.ranker = ranker
        self.limit = max(1, min(limit, RECO_LIMIT))
        self.ai_timeout_s = ai_timeout_s
        self.rng = rng or random.Random()

    @property
    def steps(self) -> List[Step]:
        return [
            self.check_ai_configured,
            self.load_catalog,
            self.gather_signal,
            self.ai_ranking,
            self.category_similarity,
            self.random_pick,
        ]

    async def resolve(self, user_id: str) -> RecommendationResult:
        t0 = time.perf_counter()
        ctx = ResolveContext(user_id=user_id)
        try:
            for step in self.steps:
                result = await step(ctx)
                if result is not None:
                    logger.info(
                        "reco done user_id=%s step=%s items=%s demo=%s time=%.3fs",
                        user_id, step.__name__, len(result.recommendations), result.is_demo_mode,
                        time.perf_counter() - t0,
                    )
                    return result
            logger.warning("reco chain exhausted user_id=%s", user_id)
            return _static(MSG_NO_PRODUCTS)
        except Exception:
            logger.exception("reco failed unexpectedly user_id=%s", user_id)
            return RecommendationResult(
                recommendations=SERVICE_FALLBACK_PRODUCTS,
                message=MSG_SERVICE_UNAVAILABLE,
                is_demo_mode=True,
            )

    # ---- 1) Capability check -----------------------------------------------

    async def check_ai_configured(self, ctx: ResolveContext) -> Optional[RecommendationResult]:
        if self.ranker is None:
            logger.info("reco user_id=%s: AI not configured, serving demo list", ctx.user_id)
            return _static(MSG_AI_NOT_CONFIGURED)
        return None

    # ---- 2) Catalog availability -------------------------------------------

    async def load_catalog(self, ctx: ResolveContext) -> Optional[RecommendationResult]:
        if self.products is None:
            logger.warning("reco user_id=%s: no database, serving demo list", ctx.user_id)
            return _static(MSG_DB_NOT_AVAILABLE)
        try:
            ctx.catalog = list(await self.products.list_all())
        except Exception as e:
            logger.error("reco %s", CollaboratorUnreachableError("catalog", e).message)
            return _static(MSG_DB_CONNECTION_FAILED)
        if not ctx.catalog:
            logger.warning("reco user_id=%s: empty catalog, serving demo list", ctx.user_id)
            return _static(MSG_NO_PRODUCTS)
        logger.debug("reco catalog size=%s", len(ctx.catalog))
        return None

    # ---- 3) Signal gathering -----------------------------------------------

    async def _fetch_history(self, name: str, repo, user_id: str) -> list:
        """A failed or missing source counts as an empty history."""
        if repo is None:
            return []
        try:
            return list(await repo.list_by_user(user_id))
        except Exception as e:
            logger.warning("reco %s", CollaboratorUnreachableError(name, e).message)
            return []

    async def gather_signal(self, ctx: ResolveContext) -> Optional[RecommendationResult]:
        orders, wishlist = await asyncio.gather(
            self._fetch_history("orders", self.orders, ctx.user_id),
            self._fetch_history("wishlist", self.wishlist, ctx.user_id),
        )
        ordered_ids = [line.product_id for order in orders for line in order.items]
        wished_ids = [item.product_id for item in wishlist]
        # Union, first occurrence wins
        ctx.interacted_ids = list(dict.fromkeys(ordered_ids + wished_ids))
        logger.info(
            "reco signal user_id=%s orders=%s wishlist=%s interacted=%s",
            ctx.user_id, len(orders), len(wishlist), len(ctx.interacted_ids),
        )

        if not ctx.interacted_ids:
            return RecommendationResult(
                recommendations=ctx.catalog[: self.limit],
                message=MSG_POPULAR,
                is_demo_mode=False,
            )
        return None

    # ---- 4) AI ranking -----------------------------------------------------

    async def ai_ranking(self, ctx: ResolveContext) -> Optional[RecommendationResult]:
        if self.ranker is None:
            return None
        try:
            ids = await asyncio.wait_for(
                self.ranker.rank(ctx.interacted, ctx.catalog, self.limit),
                timeout=self.ai_timeout_s,
            )
        except asyncio.TimeoutError:
            logger.warning("reco AI ranking timed out after %.1fs user_id=%s", self.ai_timeout_s, ctx.user_id)
            return None
        except Exception as e:
            logger.warning("reco AI ranking failed user_id=%s: %s", ctx.user_id, e)
            return None

        by_id = {p.product_id: p for p in ctx.catalog}
        picks = [by_id[pid] for pid in dict.fromkeys(ids or []) if pid in by_id][: self.limit]
        if not picks:
            err = MalformedResponseError(",".join(ids or []))
            logger.warning("reco AI ranking unusable user_id=%s: %s %s", ctx.user_id, err.message, err.details)
            return None
        return RecommendationResult(recommendations=picks, message=MSG_AI, is_demo_mode=False)

    # ---- 4a) Category similarity -------------------------------------------

    async def category_similarity(self, ctx: ResolveContext) -> Optional[RecommendationResult]:
        seen = set(ctx.interacted_ids)
        categories = {p.category for p in ctx.interacted}
        picks = [
            p for p in ctx.catalog
            if p.category in categories and p.product_id not in seen
        ][: self.limit]
        if not picks:
            return None
        return RecommendationResult(recommendations=picks, message=MSG_CATEGORY, is_demo_mode=False)

    # ---- 4b) Random --------------------------------------------------------

    async def random_pick(self, ctx: ResolveContext) -> Optional[RecommendationResult]:
        shuffled = list(ctx.catalog)
        self.rng.shuffle(shuffled)
        picks = shuffled[: self.limit]
        if not picks:
            return None
        return RecommendationResult(recommendations=picks, message=MSG_RANDOM, is_demo_mode=False)

"""
추천 목록 서비스
호출자가 넘긴 후보 제품을 필터링, 점수화(캐시 경유), 정렬해 추천 목록/루틴/유사 제품을 만든다
"""
import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from matchcare.models.profile_models import ProductRecord, SkinProfile
from matchcare.models.scoring_models import (
    RecommendationResult, RoutineStep, ScoredProduct, SimilarProduct
)
from matchcare.services.match_score_engine import MatchScoreEngine
from matchcare.services.score_cache import ScoreCache
from matchcare.shared.constants import CandidateLimits, ROUTINE_STEPS
from matchcare.utils.time_tracker import TimeTracker

logger = logging.getLogger(__name__)


def _category_matches(product: ProductRecord, category: Optional[str]) -> bool:
    """카테고리 부분 문자열 필터 (대소문자 무시)"""
    if not category or not category.strip():
        return True
    return category.strip().lower() in (product.main_category or "").lower()


class RecommendationService:
    """추천 목록 생성 서비스"""

    def __init__(
        self,
        engine: MatchScoreEngine,
        cache: ScoreCache,
        max_scored_candidates: int = CandidateLimits.MAX_SCORED_CANDIDATES,
    ):
        self.engine = engine
        self.cache = cache
        self.max_scored_candidates = max_scored_candidates

    def candidate_bound(self, limit: int) -> int:
        """점수를 계산할 최대 후보 수"""
        return min(limit * CandidateLimits.CANDIDATE_MULTIPLIER, self.max_scored_candidates)

    async def recommend(
        self,
        profile: SkinProfile,
        candidates: Sequence[ProductRecord],
        user_id: Optional[str] = None,
        limit: int = CandidateLimits.DEFAULT_LIMIT,
        category: Optional[str] = None,
        exclude_ids: Iterable[str] = (),
        force_recalculate: bool = False,
        include_explanation: bool = True,
    ) -> RecommendationResult:
        """
        추천 목록 생성

        1. 제외 ID / 카테고리 필터
        2. 후보 수 제한 (limit × 2, 최대 MAX_SCORED_CANDIDATES)
        3. 동시 점수 계산 (캐시 조회 → 미스면 계산 후 저장, 게스트는 캐시 미사용)
        4. 점수 내림차순 안정 정렬 후 limit개 반환
        """
        tracker = TimeTracker("recommend").start()

        if limit <= 0:
            return RecommendationResult(total_candidates=len(candidates))

        excluded = {str(product_id) for product_id in exclude_ids}
        pool = [
            product for product in candidates
            if product.product_id not in excluded and _category_matches(product, category)
        ]
        filtered_count = len(pool)
        pool = pool[:self.candidate_bound(limit)]
        tracker.step("filter")

        scored = await asyncio.gather(*(
            self._score(product, profile, user_id, force_recalculate) for product in pool
        ))
        tracker.step("score")

        # 동점은 후보 순서 유지
        ranked = sorted(scored, key=lambda item: item.match_score, reverse=True)[:limit]
        if include_explanation:
            for item in ranked:
                item.explanation = self.engine.explain(item.match_reasons)
        tracker.step("rank")

        metrics = tracker.finish()
        cache_hits = sum(1 for item in scored if item.from_cache)

        logger.info(
            f"🎯 추천 완료: 후보 {len(candidates)}개 → 필터 {filtered_count}개 → "
            f"점수 계산 {len(pool)}개 (캐시 {cache_hits}개) → 반환 {len(ranked)}개"
        )

        return RecommendationResult(
            recommendations=ranked,
            total_candidates=filtered_count,
            scored_candidates=len(pool),
            cache_hits=cache_hits,
            step_times_ms=metrics.to_dict(),
        )

    async def _score(
        self,
        product: ProductRecord,
        profile: SkinProfile,
        user_id: Optional[str],
        force_recalculate: bool,
    ) -> ScoredProduct:
        """제품 하나 점수 (회원은 캐시 경유)"""
        score = None
        reasons: List[str] = []
        from_cache = False

        if user_id:
            record = await self.cache.get(user_id, product.product_id, force_recalculate=force_recalculate)
            if record is not None:
                score, reasons, from_cache = record.score, list(record.reasons), True

        if score is None:
            result = self.engine.compute(product, profile)
            score, reasons = result.score, result.reasons
            if user_id:
                await self.cache.put(user_id, product.product_id, score, reasons)

        return ScoredProduct(
            product_id=product.product_id,
            product_name=product.product_name,
            brand=product.brand,
            main_category=product.main_category,
            match_score=score,
            match_reasons=reasons,
            from_cache=from_cache,
        )

    async def recommend_routine(
        self,
        profile: SkinProfile,
        candidates: Sequence[ProductRecord],
        user_id: Optional[str] = None,
    ) -> Dict[str, List[RoutineStep]]:
        """아침/저녁 루틴 단계별 상위 3개 제품"""
        routine: Dict[str, List[RoutineStep]] = {}
        for time_of_day, steps in ROUTINE_STEPS.items():
            routine[time_of_day] = []
            for step, category, required in steps:
                result = await self.recommend(
                    profile,
                    candidates,
                    user_id=user_id,
                    limit=CandidateLimits.ROUTINE_STEP_LIMIT,
                    category=category,
                )
                routine[time_of_day].append(RoutineStep(
                    step=step,
                    category=category,
                    required=required,
                    recommendations=result.recommendations,
                ))
        return routine

    def similar_products(
        self,
        source: ProductRecord,
        candidates: Sequence[ProductRecord],
        limit: int = CandidateLimits.SIMILAR_LIMIT,
    ) -> List[SimilarProduct]:
        """핵심 성분 또는 카테고리를 공유하는 제품을 성분 유사도 순으로"""
        if limit <= 0:
            return []

        source_keys = {name.lower() for name in source.key_ingredients}
        source_category = (source.main_category or "").strip().lower()

        def related(product: ProductRecord) -> bool:
            if product.product_id == source.product_id:
                return False
            if source_keys & {name.lower() for name in product.key_ingredients}:
                return True
            return bool(source_category) and (product.main_category or "").strip().lower() == source_category

        pool = sorted(
            (product for product in candidates if related(product)),
            key=lambda product: product.rating,
            reverse=True,
        )[:limit * CandidateLimits.CANDIDATE_MULTIPLIER]

        similar = [
            SimilarProduct(
                product_id=product.product_id,
                product_name=product.product_name,
                brand=product.brand,
                main_category=product.main_category,
                similarity_score=self.engine.ingredient_similarity(source.key_ingredients, product.key_ingredients),
            )
            for product in pool
        ]
        similar.sort(key=lambda item: item.similarity_score, reverse=True)
        return similar[:limit]

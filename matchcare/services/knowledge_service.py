"""
스킨케어 지식 서비스
지식 그래프(트리플 문서)에서 성분 기능, 적합 피부 타입, 개선 고민, 시너지/상충 관계를 조회하고
그래프가 없거나 매칭이 부족하면 정적 키워드 규칙으로 보완한다.

모든 조회 메서드는 예외를 던지지 않으며, 결과는 (메서드, 인자) 키로 TTL 캐시에 저장된다.
"""

import json
import logging
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from matchcare.config.knowledge_tables import (
    BenefitTables, CategoryTables, DefaultMappings, KeywordRules, NodeClasses, Predicates
)
from matchcare.models.profile_models import ProductRecord
from matchcare.models.scoring_models import IngredientFact, KnowledgeLoadError
from matchcare.services.ttl_cache import TTLCache
from matchcare.shared.constants import DEFAULT_SUITABLE_SKIN_TYPES, KnowledgeCacheConfig

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_WORD = re.compile(r"[\s\-_]+")
_MIN_LABEL_LENGTH = 3

EMPTY: FrozenSet[str] = frozenset()


def normalize_name(name: Any) -> str:
    """성분/카테고리명 정규화 (소문자, 연속 공백 하나로)"""
    if name is None:
        return ""
    return " ".join(str(name).lower().split())


def local_name(term: Any) -> str:
    """IRI 또는 접두어 표기에서 로컬 이름 추출"""
    value = str(term).strip()
    value = value.split("/")[-1].split("#")[-1]
    if ":" in value:
        value = value.split(":")[-1]
    return value


def to_tag(term: Any) -> str:
    """그래프 용어 → 태그 (FineLines → fine_lines)"""
    words = _CAMEL_BOUNDARY.sub("_", local_name(term))
    return _NON_WORD.sub("_", words).strip("_").lower()


def humanize(term: Any) -> str:
    """그래프 용어 → 사람이 읽는 레이블 (HyaluronicAcid → hyaluronic acid)"""
    return to_tag(term).replace("_", " ")


@dataclass
class IngredientNode:
    """그래프 상의 성분 노드"""
    label: str
    functions: Set[str] = field(default_factory=set)
    skin_types: Set[str] = field(default_factory=set)
    concerns: Set[str] = field(default_factory=set)
    benefits: Set[str] = field(default_factory=set)
    synergies: Set[str] = field(default_factory=set)
    incompatibilities: Set[str] = field(default_factory=set)


@dataclass
class KnowledgeGraph:
    """파싱된 지식 그래프"""
    ingredients: Dict[str, IngredientNode] = field(default_factory=dict)
    skin_types: Dict[str, str] = field(default_factory=dict)
    concerns: Dict[str, str] = field(default_factory=dict)
    key_ingredients: Dict[str, str] = field(default_factory=dict)
    triple_count: int = 0
    ignored_triples: int = 0

    def matching_nodes(self, query: str) -> List[IngredientNode]:
        """레이블 부분 문자열 매칭 (양방향, 대소문자 무시)"""
        if len(query) < _MIN_LABEL_LENGTH:
            return [node for key, node in self.ingredients.items() if key == query]
        return [
            node for key, node in self.ingredients.items()
            if len(key) >= _MIN_LABEL_LENGTH and (key in query or query in key)
        ]


def _split_triple(item: Any) -> Optional[Tuple[str, str, str]]:
    """트리플 항목 파싱 ([s, p, o] 또는 {subject, predicate, object})"""
    if isinstance(item, dict):
        parts = (item.get("subject"), item.get("predicate"), item.get("object"))
    elif isinstance(item, (list, tuple)) and len(item) == 3:
        parts = tuple(item)
    else:
        return None
    if any(part is None or str(part).strip() == "" for part in parts):
        return None
    return str(parts[0]), str(parts[1]), str(parts[2])


def parse_knowledge_document(document: Any) -> KnowledgeGraph:
    """
    트리플 문서를 지식 그래프로 변환

    Raises:
        KnowledgeLoadError: 문서 구조가 잘못되었거나 사용 가능한 트리플이 없는 경우
    """
    if not isinstance(document, dict):
        raise KnowledgeLoadError("지식 문서 최상위는 객체여야 합니다")

    raw_triples = document.get("triples")
    if not isinstance(raw_triples, list):
        raise KnowledgeLoadError("'triples' 배열이 없습니다")

    raw_labels = document.get("labels") or {}
    if not isinstance(raw_labels, dict):
        raise KnowledgeLoadError("'labels'는 객체여야 합니다")

    triples: List[Tuple[str, str, str]] = []
    graph = KnowledgeGraph()
    labels: Dict[str, str] = {local_name(k): str(v) for k, v in raw_labels.items()}

    for item in raw_triples:
        parsed = _split_triple(item)
        if parsed is None:
            graph.ignored_triples += 1
            continue
        subject, predicate, obj = parsed
        predicate = local_name(predicate)
        if predicate == Predicates.LABEL:
            labels[local_name(subject)] = obj
            continue
        triples.append((local_name(subject), predicate, obj))

    def label_of(term: str) -> str:
        return normalize_name(labels.get(local_name(term)) or humanize(term))

    for subject, predicate, obj in triples:
        if predicate == Predicates.TYPE:
            node_class = local_name(obj)
            if node_class == NodeClasses.SKIN_TYPE:
                graph.skin_types[to_tag(subject)] = labels.get(subject, subject)
            elif node_class == NodeClasses.SKIN_CONCERN:
                graph.concerns[to_tag(subject)] = labels.get(subject, subject)
            elif node_class == NodeClasses.KEY_INGREDIENT:
                graph.key_ingredients[label_of(subject)] = labels.get(subject, subject)
            else:
                graph.ignored_triples += 1
                continue
            graph.triple_count += 1
            continue

        if predicate not in Predicates.VOCABULARY:
            graph.ignored_triples += 1
            continue

        key = label_of(subject)
        node = graph.ingredients.setdefault(key, IngredientNode(label=key))
        if predicate == Predicates.HAS_FUNCTION:
            node.functions.add(to_tag(obj))
        elif predicate == Predicates.RECOMMENDED_FOR:
            node.skin_types.add(to_tag(obj))
        elif predicate == Predicates.TREATS_CONCERN:
            node.concerns.add(to_tag(obj))
        elif predicate == Predicates.PROVIDES_BENEFIT:
            node.benefits.add(humanize(obj))
        elif predicate == Predicates.SYNERGISTIC_WITH:
            node.synergies.add(label_of(obj))
        elif predicate == Predicates.INCOMPATIBLE_WITH:
            node.incompatibilities.add(label_of(obj))
        graph.triple_count += 1

    if graph.triple_count == 0:
        raise KnowledgeLoadError("사용 가능한 트리플이 없습니다")

    return graph


def _keyword_matches(query: str, table: Dict[str, Tuple[str, ...]]) -> Set[str]:
    """정적 키워드 규칙 매칭 (부분 문자열)"""
    result: Set[str] = set()
    if not query:
        return result
    for keyword, values in table.items():
        if keyword in query:
            result.update(values)
    return result


class KnowledgeService:
    """스킨케어 지식 조회 서비스"""

    def __init__(
        self,
        graph_path: Optional[str] = None,
        cache_ttl_seconds: float = KnowledgeCacheConfig.TTL_SECONDS,
        cache_max_size: int = KnowledgeCacheConfig.MAX_SIZE,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        지식 서비스 초기화 (load() 호출 전까지는 정적 규칙만 사용)

        Args:
            graph_path: 지식 그래프 JSON 문서 경로
            cache_ttl_seconds: 조회 결과 캐시 TTL (초)
            cache_max_size: 조회 결과 캐시 최대 엔트리 수
            clock: 캐시 시계 (테스트 주입용)
        """
        self._graph_path = graph_path
        self._graph: Optional[KnowledgeGraph] = None
        self._cache = TTLCache(
            max_size=cache_max_size,
            default_ttl=cache_ttl_seconds,
            clock=clock,
            name="knowledge_query_cache",
        )
        self._lock = threading.RLock()
        self._is_loaded = False
        self._loaded_at: Optional[datetime] = None
        self._last_error: Optional[str] = None

    # === 로드 ===

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    @property
    def graph_available(self) -> bool:
        return self._graph is not None

    @property
    def source(self) -> str:
        return "graph" if self._graph is not None else "fallback"

    def load(self, graph_path: Optional[str] = None) -> bool:
        """
        지식 그래프 로드 (실패 시 기본 매핑으로 대체, 예외 전파 없음)

        Returns:
            bool: 그래프 문서가 실제로 로드되었는지 여부
        """
        with self._lock:
            if graph_path is not None:
                self._graph_path = graph_path

            logger.info(f"🔄 스킨케어 지식 그래프 로드 시작: {self._graph_path}")
            try:
                self._graph = self._read_graph(self._graph_path)
                self._last_error = None
                logger.info(
                    f"✅ 지식 그래프 로드 완료: 성분 {len(self._graph.ingredients)}개, "
                    f"트리플 {self._graph.triple_count}개 (무시 {self._graph.ignored_triples}개)"
                )
            except KnowledgeLoadError as e:
                self._graph = None
                self._last_error = str(e)
                logger.warning(f"⚠️  지식 그래프 사용 불가, 기본 매핑으로 대체: {e}")
            except Exception as e:
                self._graph = None
                self._last_error = str(e)
                logger.error(f"❌ 지식 그래프 로드 중 예상치 못한 오류, 기본 매핑으로 대체: {e}", exc_info=True)
            finally:
                self._is_loaded = True
                self._loaded_at = datetime.now()
                self._cache.clear()

            return self._graph is not None

    def reload(self) -> bool:
        """마지막 경로로 다시 로드 (조회 캐시 전체 삭제)"""
        return self.load()

    def _read_graph(self, graph_path: Optional[str]) -> KnowledgeGraph:
        if not graph_path:
            raise KnowledgeLoadError("지식 그래프 경로가 설정되지 않았습니다")

        path = Path(graph_path)
        if not path.is_file():
            raise KnowledgeLoadError(f"지식 그래프 파일을 찾을 수 없습니다: {graph_path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise KnowledgeLoadError(f"지식 그래프 파일 읽기 실패: {e}") from e
        except json.JSONDecodeError as e:
            raise KnowledgeLoadError(f"지식 그래프 JSON 파싱 실패: {e}") from e

        return parse_knowledge_document(document)

    def status(self) -> Dict[str, Any]:
        """로드 상태 및 캐시 통계"""
        graph = self._graph
        return {
            "loaded": self._is_loaded,
            "source": self.source,
            "graph_path": self._graph_path,
            "loaded_at": self._loaded_at.isoformat() if self._loaded_at else None,
            "last_error": self._last_error,
            "ingredients": len(graph.ingredients) if graph else 0,
            "triples": graph.triple_count if graph else 0,
            "skin_types": len(self.get_all_skin_types()),
            "concerns": len(self.get_all_concerns()),
            "key_ingredients": len(self.get_all_key_ingredients()),
            "cache": self._cache.get_cache_info(),
        }

    # === 캐시 헬퍼 ===

    def _cached(self, method: str, argument: Any, compute: Callable[[str], FrozenSet[str]],
                default: FrozenSet[str]) -> FrozenSet[str]:
        query = normalize_name(argument)
        if not query:
            return default

        def factory() -> FrozenSet[str]:
            try:
                return frozenset(compute(query))
            except Exception as e:
                logger.error(f"지식 조회 실패 ({method}, {query!r}): {e}", exc_info=True)
                return default

        return self._cache.get_or_set((method, query), factory)

    def _graph_values(self, query: str, attribute: str) -> Set[str]:
        graph = self._graph
        result: Set[str] = set()
        if graph is None:
            return result
        for node in graph.matching_nodes(query):
            result.update(getattr(node, attribute))
        return result

    # === 성분 조회 ===

    def get_functions(self, ingredient_name: Any) -> FrozenSet[str]:
        """성분 기능 (그래프 ∪ 키워드 규칙)"""
        def compute(query: str) -> Set[str]:
            return self._graph_values(query, "functions") | _keyword_matches(query, KeywordRules.FUNCTIONS)
        return self._cached("functions", ingredient_name, compute, EMPTY)

    def get_suitable_skin_types(self, ingredient_name: Any) -> FrozenSet[str]:
        """적합 피부 타입 (매칭 없으면 전체 기본 집합)"""
        def compute(query: str) -> Set[str]:
            found = self._graph_values(query, "skin_types") | _keyword_matches(query, KeywordRules.SKIN_TYPES)
            return found or DEFAULT_SUITABLE_SKIN_TYPES
        return self._cached("skin_types", ingredient_name, compute, DEFAULT_SUITABLE_SKIN_TYPES)

    def get_treated_concerns(self, ingredient_name: Any) -> FrozenSet[str]:
        """개선하는 피부 고민 (매칭 없으면 빈 집합)"""
        def compute(query: str) -> Set[str]:
            return self._graph_values(query, "concerns") | _keyword_matches(query, KeywordRules.CONCERNS)
        return self._cached("concerns", ingredient_name, compute, EMPTY)

    def get_benefits(self, ingredient_name: Any) -> FrozenSet[str]:
        """효능 (그래프 효능 ∪ 기능/고민 매핑)"""
        def compute(query: str) -> Set[str]:
            benefits = self._graph_values(query, "benefits")
            for function in self.get_functions(query):
                if function in BenefitTables.FUNCTION_BENEFITS:
                    benefits.add(BenefitTables.FUNCTION_BENEFITS[function])
            for concern in self.get_treated_concerns(query):
                if concern in BenefitTables.CONCERN_BENEFITS:
                    benefits.add(BenefitTables.CONCERN_BENEFITS[concern])
            return benefits
        return self._cached("benefits", ingredient_name, compute, EMPTY)

    def get_synergies(self, ingredient_name: Any) -> FrozenSet[str]:
        """시너지 성분 (그래프 직접 관계만)"""
        def compute(query: str) -> Set[str]:
            node = self._graph.ingredients.get(query) if self._graph else None
            return set(node.synergies) if node else set()
        return self._cached("synergies", ingredient_name, compute, EMPTY)

    def get_incompatibilities(self, ingredient_name: Any) -> FrozenSet[str]:
        """상충 성분 (그래프 직접 관계만)"""
        def compute(query: str) -> Set[str]:
            node = self._graph.ingredients.get(query) if self._graph else None
            return set(node.incompatibilities) if node else set()
        return self._cached("incompatibilities", ingredient_name, compute, EMPTY)

    def is_key_ingredient(self, ingredient_name: Any) -> bool:
        """핵심 성분 여부"""
        query = normalize_name(ingredient_name)
        return bool(query) and query in self.get_all_key_ingredients()

    def get_ingredient_fact(self, ingredient_name: Any) -> IngredientFact:
        """성분 하나에 대한 전체 지식"""
        return IngredientFact(
            name=normalize_name(ingredient_name),
            functions=self.get_functions(ingredient_name),
            suitable_skin_types=self.get_suitable_skin_types(ingredient_name),
            treated_concerns=self.get_treated_concerns(ingredient_name),
            benefits=self.get_benefits(ingredient_name),
            synergistic_with=self.get_synergies(ingredient_name),
            incompatible_with=self.get_incompatibilities(ingredient_name),
            is_key_ingredient=self.is_key_ingredient(ingredient_name),
        )

    # === 카테고리 조회 (카탈로그 보강용) ===

    def get_skin_types_for_category(self, category: Any) -> FrozenSet[str]:
        def compute(query: str) -> Tuple[str, ...]:
            return CategoryTables.SKIN_TYPES.get(query, CategoryTables.DEFAULT_SKIN_TYPES)
        return self._cached("category_skin_types", category, compute,
                            frozenset(CategoryTables.DEFAULT_SKIN_TYPES))

    def get_concerns_for_category(self, category: Any) -> FrozenSet[str]:
        def compute(query: str) -> Tuple[str, ...]:
            return CategoryTables.CONCERNS.get(query, ())
        return self._cached("category_concerns", category, compute, EMPTY)

    def get_benefits_for_category(self, category: Any) -> FrozenSet[str]:
        def compute(query: str) -> Tuple[str, ...]:
            return CategoryTables.BENEFITS.get(query, ())
        return self._cached("category_benefits", category, compute, EMPTY)

    def enrich_product(self, product: ProductRecord) -> ProductRecord:
        """비어 있는 적합 피부 타입/고민/효능을 카테고리 매핑으로 채운 사본"""
        update: Dict[str, List[str]] = {}
        if not product.suitable_skin_types:
            update["suitable_skin_types"] = sorted(self.get_skin_types_for_category(product.main_category))
        if not product.addresses_concerns:
            update["addresses_concerns"] = sorted(self.get_concerns_for_category(product.main_category))
        if not product.provided_benefits:
            update["provided_benefits"] = sorted(self.get_benefits_for_category(product.main_category))
        if not update:
            return product
        logger.debug(f"제품 {product.product_id} 카테고리 보강: {list(update)}")
        return product.model_copy(update=update)

    # === 전체 목록 ===

    def get_all_skin_types(self) -> Dict[str, str]:
        result = dict(DefaultMappings.SKIN_TYPES)
        if self._graph:
            result.update(self._graph.skin_types)
        return result

    def get_all_concerns(self) -> Dict[str, str]:
        result = dict(DefaultMappings.CONCERNS)
        if self._graph:
            result.update(self._graph.concerns)
        return result

    def get_all_key_ingredients(self) -> Dict[str, str]:
        result = dict(DefaultMappings.KEY_INGREDIENTS)
        if self._graph:
            result.update(self._graph.key_ingredients)
        return result

    def get_known_interactions(self) -> Dict[str, Dict[str, List[str]]]:
        """큐레이션된 시너지/상충 성분 쌍 (목록 표시용)"""
        return {
            "synergistic": {k: list(v) for k, v in DefaultMappings.SYNERGIES.items()},
            "incompatible": {k: list(v) for k, v in DefaultMappings.INCOMPATIBILITIES.items()},
        }

    def iter_ingredient_labels(self) -> Iterable[str]:
        """그래프 성분 레이블 목록"""
        return sorted(self._graph.ingredients) if self._graph else []

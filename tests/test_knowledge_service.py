"""
KnowledgeService 테스트 (기본 매핑 모드 / 그래프 모드)
"""
import json

from matchcare.models.scoring_models import IngredientFact
from matchcare.services.knowledge_service import (
    KnowledgeService, humanize, local_name, parse_knowledge_document, to_tag
)
from matchcare.shared.constants import DEFAULT_SUITABLE_SKIN_TYPES
from tests.conftest import FakeClock, make_product


def _write_graph(tmp_path, document, name="graph.json"):
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)


# === 용어 변환 ===

def test_term_helpers():
    assert local_name("http://example.org/skin#HyaluronicAcid") == "HyaluronicAcid"
    assert local_name("http://example.org/skin/FineLines") == "FineLines"
    assert local_name("skin:Niacinamide") == "Niacinamide"
    assert to_tag("FineLines") == "fine_lines"
    assert to_tag("DarkUndereyes") == "dark_undereyes"
    assert humanize("HyaluronicAcid") == "hyaluronic acid"
    assert humanize("Vitamin C") == "vitamin c"


# === 기본 매핑 모드 ===

def test_fallback_reports_loaded(fallback_knowledge):
    assert fallback_knowledge.is_loaded is True
    assert fallback_knowledge.graph_available is False
    assert fallback_knowledge.source == "fallback"


def test_fallback_treated_concerns_for_salicylic_acid(fallback_knowledge):
    assert fallback_knowledge.get_treated_concerns("Salicylic Acid") == {"acne", "pores", "oiliness"}


def test_fallback_functions_from_keyword_rules(fallback_knowledge):
    assert fallback_knowledge.get_functions("Hyaluronic Acid") == {"humectant", "hydrating"}
    assert fallback_knowledge.get_functions("SODIUM HYALURONATE") == {"humectant", "hydrating"}


def test_fallback_defaults_for_unknown_ingredient(fallback_knowledge):
    assert fallback_knowledge.get_suitable_skin_types("Unobtainium") == DEFAULT_SUITABLE_SKIN_TYPES
    assert fallback_knowledge.get_treated_concerns("Water") == frozenset()
    assert fallback_knowledge.get_functions("Water") == frozenset()


def test_fallback_has_no_synergy_edges(fallback_knowledge):
    assert fallback_knowledge.get_synergies("vitamin c") == frozenset()
    assert fallback_knowledge.get_incompatibilities("retinoid") == frozenset()


def test_blank_names_return_defaults(fallback_knowledge):
    assert fallback_knowledge.get_functions("") == frozenset()
    assert fallback_knowledge.get_treated_concerns("   ") == frozenset()
    assert fallback_knowledge.get_suitable_skin_types(None) == DEFAULT_SUITABLE_SKIN_TYPES


def test_results_are_immutable(fallback_knowledge):
    result = fallback_knowledge.get_functions("Niacinamide")
    assert isinstance(result, frozenset)


def test_benefits_combine_functions_and_concerns(fallback_knowledge):
    assert fallback_knowledge.get_benefits("Hyaluronic Acid") == {"hydrating", "helps with anti aging"}


def test_category_lookups(fallback_knowledge):
    assert fallback_knowledge.get_skin_types_for_category("Unknown") == {"normal", "combination"}
    assert fallback_knowledge.get_concerns_for_category("Moisturizer") == {"dryness", "sensitivity", "fine_lines"}
    assert fallback_knowledge.get_concerns_for_category("Unknown") == frozenset()
    assert fallback_knowledge.get_benefits_for_category("unknown") == frozenset()


def test_enrich_product_fills_only_empty_fields(fallback_knowledge):
    product = make_product("e1", main_category="Toner", suitable_skin_types=["dry"])
    enriched = fallback_knowledge.enrich_product(product)

    assert enriched.suitable_skin_types == ["dry"]
    assert enriched.addresses_concerns == sorted(["acne", "oiliness", "pores"])
    assert enriched.provided_benefits == sorted(["reduces large pores", "hydrating"])
    assert product.addresses_concerns == []


def test_curated_catalogs(fallback_knowledge):
    assert fallback_knowledge.is_key_ingredient("Niacinamide") is True
    assert fallback_knowledge.is_key_ingredient("Water") is False
    assert "normal" in fallback_knowledge.get_all_skin_types()
    assert "acne" in fallback_knowledge.get_all_concerns()

    interactions = fallback_knowledge.get_known_interactions()
    assert interactions["synergistic"]["vitamin c"] == ["vitamin e"]
    assert "aha" in interactions["incompatible"]["retinoid"]


def test_ingredient_fact(fallback_knowledge):
    fact = fallback_knowledge.get_ingredient_fact("Salicylic Acid")
    assert isinstance(fact, IngredientFact)
    assert fact.name == "salicylic acid"
    assert fact.treated_concerns == {"acne", "pores", "oiliness"}
    assert "exfoliant" in fact.functions
    assert fact.to_dict()["treated_concerns"] == ["acne", "oiliness", "pores"]


# === 그래프 모드 ===

def test_graph_load(graph_knowledge):
    status = graph_knowledge.status()
    assert status["loaded"] is True
    assert status["source"] == "graph"
    assert status["ingredients"] == 6
    assert status["last_error"] is None


def test_graph_unions_with_keyword_rules(graph_knowledge):
    assert graph_knowledge.get_treated_concerns("Salicylic Acid") == {"acne", "pores", "oiliness", "blackheads"}
    assert graph_knowledge.get_functions("Hyaluronic Acid") == {"humectant", "hydrating"}


def test_graph_substring_match_either_direction(graph_knowledge):
    # 질의가 레이블을 포함
    assert "sensitive" in graph_knowledge.get_suitable_skin_types("Centella Asiatica Extract")
    # 레이블이 질의를 포함
    assert "redness" in graph_knowledge.get_treated_concerns("centella")


def test_graph_synergies_and_incompatibilities(graph_knowledge):
    assert graph_knowledge.get_synergies("Vitamin C") == {"vitamin e"}
    assert graph_knowledge.get_synergies("hyaluronic acid") == {"niacinamide"}
    assert graph_knowledge.get_incompatibilities("Retinol") == {"glycolic acid", "salicylic acid"}
    assert graph_knowledge.get_synergies("Vitamin C Serum") == frozenset()


def test_graph_benefit_edges(graph_knowledge):
    assert "brightening" in graph_knowledge.get_benefits("Vitamin C")


def test_graph_catalogs(graph_knowledge):
    assert graph_knowledge.get_all_concerns()["texture"] == "Texture"
    assert graph_knowledge.is_key_ingredient("salicylic acid") is True
    assert "salicylic acid" in graph_knowledge.iter_ingredient_labels()


def test_iri_terms_and_label_predicate(tmp_path):
    path = _write_graph(tmp_path, {
        "triples": [
            ["http://example.org/skin#Bakuchiol",
             "http://www.w3.org/2000/01/rdf-schema#label", "Bakuchiol Extract"],
            ["http://example.org/skin#Bakuchiol",
             "http://example.org/skin#treatsConcern", "http://example.org/skin#FineLines"],
            ["http://example.org/skin#Bakuchiol", "http://example.org/skin#unknownPredicate", "X"],
        ]
    })
    knowledge = KnowledgeService(graph_path=path)

    assert knowledge.load() is True
    assert knowledge.get_treated_concerns("bakuchiol extract") == {"fine_lines"}
    assert knowledge.status()["triples"] == 1


def test_parse_counts_ignored_triples():
    graph = parse_knowledge_document({
        "triples": [
            ["Retinol", "hasFunction", "CellRenewal"],
            ["Retinol", "madeBy", "Lab"],
            ["only", "two"],
            {"subject": "Retinol", "predicate": "hasFunction"},
        ]
    })
    assert graph.triple_count == 1
    assert graph.ignored_triples == 3


# === 로드 실패 → 기본 매핑 ===

def test_missing_file_falls_back(tmp_path):
    knowledge = KnowledgeService(graph_path=str(tmp_path / "nope.json"))
    assert knowledge.load() is False
    assert knowledge.is_loaded is True
    assert knowledge.source == "fallback"
    assert knowledge.get_treated_concerns("Salicylic Acid") == {"acne", "pores", "oiliness"}


def test_invalid_json_falls_back(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    knowledge = KnowledgeService(graph_path=str(path))

    assert knowledge.load() is False
    assert "JSON" in knowledge.status()["last_error"]


def test_wrong_shape_falls_back(tmp_path):
    for document in ([1, 2, 3], {"triples": "nope"}, {"triples": [["a", "madeBy", "b"]]}):
        knowledge = KnowledgeService(graph_path=_write_graph(tmp_path, document))
        assert knowledge.load() is False
        assert knowledge.source == "fallback"


# === 조회 캐시 ===

def test_queries_are_cached(tmp_path):
    clock = FakeClock()
    knowledge = KnowledgeService(cache_ttl_seconds=300, clock=clock)
    knowledge.load()

    knowledge.get_functions("Niacinamide")
    knowledge.get_functions("  niacinamide ")
    info = knowledge.status()["cache"]
    assert info["cache_hits"] == 1
    assert info["cache_size"] == 1


def test_reload_clears_query_cache(tmp_path):
    path = _write_graph(tmp_path, {"triples": [["Snailmucin", "hasFunction", "Repairing"]]})
    knowledge = KnowledgeService(graph_path=path)
    knowledge.load()
    assert knowledge.get_functions("snailmucin") == {"repairing"}

    _write_graph(tmp_path, {"triples": [["Snailmucin", "hasFunction", "Soothing"]]})
    # 재로드 전에는 캐시된 결과
    assert knowledge.get_functions("snailmucin") == {"repairing"}

    assert knowledge.reload() is True
    assert knowledge.get_functions("snailmucin") == {"soothing"}


def test_cached_results_expire(tmp_path):
    clock = FakeClock()
    knowledge = KnowledgeService(cache_ttl_seconds=300, clock=clock)
    knowledge.load()

    knowledge.get_treated_concerns("Retinol")
    clock.advance(301)
    knowledge.get_treated_concerns("Retinol")

    info = knowledge.status()["cache"]
    assert info["cache_hits"] == 0
    assert info["expired_entries"] == 1

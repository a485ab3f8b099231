from guideline_help.engine import HelpEngine
from guideline_help.highlighting import highlight


if __name__ == "__main__":
    engine = HelpEngine("data/help_corpus.json")
    engine.initialize()
    results = engine.search("adopt", max_results=3)
    print(
        {
            "passages": len(engine.corpus),
            "terms": engine.index.term_count,
            "results": [result.chunk_id for result in results],
            "highlight": highlight("Adaptation is key", "adapt"),
        }
    )

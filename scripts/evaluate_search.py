from guideline_help.engine import HelpEngine
from guideline_help.evaluation import evaluate_single, summarize
from guideline_help.io_utils import load_queries
from guideline_help.settings import load_settings


def main() -> None:
    """Report recall@5, MRR, and latency for the bundled evaluation queries."""
    settings, paths = load_settings()
    engine = HelpEngine(paths.corpus_file, settings=settings)
    engine.initialize()
    rows = [evaluate_single(query, engine.search, top_k=5) for query in load_queries(paths.queries_file)]
    for row in rows:
        print(f"{row.query_id}: recall@5={row.recall_at_k:.2f} mrr={row.mrr:.2f}")
    print(summarize(rows))


if __name__ == "__main__":
    main()

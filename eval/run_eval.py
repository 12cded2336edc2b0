import csv
import json
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import requests

from metrics import difficulty_spread, is_fallback, structurally_valid, topic_mention_rate

API_BASE = "http://localhost:8000"
DATASET = Path("eval/datasets/topics_v1.jsonl")
OUTDIR = Path("eval/results")


def load_dataset() -> List[Dict[str, Any]]:
    rows = []
    with DATASET.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            rows.append(json.loads(line))
    return rows


def post_json(path: str, payload: Dict[str, Any], timeout=180) -> Dict[str, Any]:
    r = requests.post(f"{API_BASE}{path}", json=payload, timeout=timeout)
    r.raise_for_status()
    return r.json()


def eval_topics(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    results = []
    for ex in rows:
        payload = {"topic": ex["topic"]}
        if ex.get("source_content"):
            payload["source_content"] = ex["source_content"]

        t0 = time.perf_counter()
        material = post_json("/study/generate", payload)
        elapsed_ms = int((time.perf_counter() - t0) * 1000)

        results.append({
            "id": ex["id"],
            "topic": ex["topic"],
            "origin": material.get("origin", ""),
            "fallback": is_fallback(material),
            "structurally_valid": structurally_valid(material),
            "flashcards": len(material.get("flashcards", [])),
            "quiz_questions": len(material.get("quizQuestions", [])),
            "topic_mention_rate": topic_mention_rate(material),
            "difficulty_spread": difficulty_spread(material),
            "latency_total_ms": elapsed_ms,
        })
    return results


def summarize(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    n = len(results)
    if n == 0:
        return {}
    def avg(key):
        return sum(float(r[key]) for r in results) / n

    return {
        "n": n,
        "fallback_rate": avg("fallback"),
        "structurally_valid": avg("structurally_valid"),
        "topic_mention_rate": avg("topic_mention_rate"),
        "flashcards_avg": avg("flashcards"),
        "quiz_questions_avg": avg("quiz_questions"),
        "latency_total_ms_avg": avg("latency_total_ms"),
    }


def write_csv(all_results: List[Dict[str, Any]], path: Path) -> None:
    if not all_results:
        return
    fieldnames = list(all_results[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        w.writerows(all_results)


def main():
    OUTDIR.mkdir(parents=True, exist_ok=True)
    rows = load_dataset()

    results = eval_topics(rows)
    s = summarize(results)
    print("\n=== SUMMARY ===")
    for k, v in s.items():
        print(f"{k}: {v}")

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_csv = OUTDIR / f"results_{ts}.csv"
    write_csv(results, out_csv)
    (OUTDIR / f"summary_{ts}.json").write_text(json.dumps(s, indent=2), encoding="utf-8")
    print(f"\nWrote: {out_csv}")


if __name__ == "__main__":
    main()

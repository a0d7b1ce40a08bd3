from __future__ import annotations
import argparse, os, datetime, logging
from fit_core.engine import AssessmentSession, Stage
from fit_core.report_html import export_report_html
from fit_core.validators import ValidationError


def ask(sess: AssessmentSession) -> str:
    q = sess.current_question()
    cur, total = sess.progress() or (0, 0)
    step, steps = sess.step()
    print(f"\n--- Step {step} of {steps} | {q.section} | Question {cur} of {total} | {q.dimension_name or q.category} ---")
    print(q.text)
    for o in q.options: print(f"  [{o.value}] {o.label}")
    prev = sess.current_answer()
    hint = f" (current: {prev})" if prev else ""
    return input(f"Your choice{hint}, 'b' to go back: ").strip()


def main():
    ap = argparse.ArgumentParser(description="Am I suited to be a Market Research Analyst?")
    ap.add_argument("--report-dir", default="reports")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.WARNING,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    sess = AssessmentSession()
    print("Market Research Analyst Fit Assessment")
    input("Press Enter to start... "); sess.start()
    input("Four steps: personality, technical skills, WISCAR, results. Press Enter to begin... "); sess.next()
    try:
        while sess.stage is not Stage.RESULTS:
            v = ask(sess)
            if v.lower() == "b":
                if not sess.previous(): print("Already at the first question of this section.")
                continue
            if v == "" and sess.current_answer():
                sess.next(); continue
            try:
                sess.select_answer(v)
            except ValidationError as e:
                print(f"Invalid choice: {e}"); continue
            sess.next()
    except KeyboardInterrupt:
        print("\nStopped by user. Nothing was saved.")
        return

    view = sess.results()
    print(f"\nRecommendation: {view.tier} - {view.message}")
    print(f"{view.confidence_percent}% Confidence Score")
    for row in view.dimension_breakdown: print(f"  {row.dimension} {row.name:<12} {row.score:5.1f}")
    for job in view.job_matches: print(f"  {job.title:<32} {job.match:5.1f}% match")
    os.makedirs(a.report_dir, exist_ok=True)
    ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    path = export_report_html(view.as_dict(), os.path.join(a.report_dir, f"report_{ts}.html"))
    print(f"Done. Report saved to: {path}")


if __name__ == "__main__": main()

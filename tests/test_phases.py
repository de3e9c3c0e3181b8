from plan_guard.plan import list_phases, slice_to_phase

PLAN = """# MASTER BUILD
Intro mentions `master_build.md`.

# PHASE 1 — Skeleton
**Build Status:** DONE
- `apps/campaign_compliance/app/page.tsx`

## PHASE 2 — Data layer
- `db/sql/001_init.sql`

# phase 10 — Polish
- `public/logo.svg`
"""


def test_slice_starts_at_heading_and_stops_before_next_phase():
    scoped = slice_to_phase(PLAN, 1)
    assert scoped.splitlines()[0] == "# PHASE 1 — Skeleton"
    assert "page.tsx" in scoped
    assert "001_init.sql" not in scoped
    assert "Intro" not in scoped


def test_extra_heading_markup_and_case_insensitive():
    assert "001_init.sql" in slice_to_phase(PLAN, 2)
    assert "logo.svg" in slice_to_phase(PLAN, 10)


def test_last_phase_runs_to_end_of_text():
    assert slice_to_phase(PLAN, 10).rstrip().endswith("`public/logo.svg`")


def test_phase_number_must_match_whole_number():
    # PHASE 1 must not match "phase 10"
    assert "logo.svg" not in slice_to_phase(PLAN, 1)


def test_missing_phase_returns_empty_string():
    assert slice_to_phase(PLAN, 3) == ""
    assert slice_to_phase("", 1) == ""


def test_crlf_line_endings():
    text = "# PHASE 1\r\n`apps/a.ts`\r\n# PHASE 2\r\n`apps/b.ts`\r\n"
    scoped = slice_to_phase(text, 1)
    assert "apps/a.ts" in scoped
    assert "apps/b.ts" not in scoped


def test_list_phases_in_document_order():
    assert list_phases(PLAN) == [1, 2, 10]
    assert list_phases("no headings") == []

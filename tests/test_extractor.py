from plan_guard.plan import extract_plan_paths, normalize_candidate


def test_code_span_and_bare_paths():
    text = """
- Page: `apps/campaign_compliance/app/page.tsx`
- Env helper lives in apps/campaign_compliance/lib/env.ts
- Seed SQL: db/sql/001_init.sql
"""
    assert extract_plan_paths(text) == [
        "apps/campaign_compliance/app/page.tsx",
        "apps/campaign_compliance/lib/env.ts",
        "db/sql/001_init.sql",
    ]


def test_duplicates_counted_once():
    text = "`scripts/b.js` then scripts/b.js again and `scripts/b.js`."
    assert extract_plan_paths(text) == ["scripts/b.js"]


def test_output_is_sorted_and_deterministic():
    text = "`scripts/z.js` `apps/m/b.ts` `apps/m/a.ts` public/logo.svg"
    first = extract_plan_paths(text)
    assert first == sorted(first)
    for _ in range(5):
        assert extract_plan_paths(text) == first


def test_paths_outside_permitted_roots_are_dropped():
    text = "`src/index.ts` `lib/foo.py` `README.md` `apps/ok.ts`"
    assert extract_plan_paths(text) == ["apps/ok.ts"]


def test_plan_self_references_are_required():
    text = "Log progress in `PHASE_LOG.md`; rules in PROTOCOLS.md; plan is master_build.md."
    assert extract_plan_paths(text) == [
        "PHASE_LOG.md",
        "PROTOCOLS.md",
        "master_build.md",
    ]


def test_urls_and_code_are_rejected():
    text = (
        "`https://example.com/apps/x.ts` "
        "`apps/{id}/page.tsx` "
        "`scripts/run.js --watch`"
    )
    # the bare-word pass still recognises scripts/run.js inside the span
    assert extract_plan_paths(text) == ["scripts/run.js"]


def test_empty_text_yields_nothing():
    assert extract_plan_paths("") == []
    assert extract_plan_paths("no paths here at all") == []


class TestNormalizeCandidate:
    def test_strips_trailing_punctuation(self):
        assert normalize_candidate("apps/x/a.ts,") == "apps/x/a.ts"
        assert normalize_candidate("apps/x/a.ts).") == "apps/x/a.ts"
        assert normalize_candidate("scripts/b.js:") == "scripts/b.js"

    def test_backslashes_become_slashes(self):
        assert normalize_candidate("apps\\x\\a.ts") == "apps/x/a.ts"

    def test_leading_dot_slash_removed(self):
        assert normalize_candidate("./scripts/b.js") == "scripts/b.js"

    def test_whitespace_only_allowed_for_markdown(self):
        assert normalize_candidate("apps/docs/Read Me.md") == "apps/docs/Read Me.md"
        assert normalize_candidate("apps/docs/read me.txt") is None

    def test_rejects_protocols_braces_backticks(self):
        assert normalize_candidate("http://apps/x") is None
        assert normalize_candidate("apps/{slug}") is None
        assert normalize_candidate("apps/`x`") is None
        assert normalize_candidate("apps/x;y") is None

    def test_rejects_parent_segments(self):
        assert normalize_candidate("apps/../../escaped.txt") is None
        assert normalize_candidate("scripts/x/../b.js") is None
        assert normalize_candidate("apps\\..\\x.ts") is None
        assert normalize_candidate("apps/..x/a.ts") == "apps/..x/a.ts"

    def test_rejects_empty(self):
        assert normalize_candidate("") is None
        assert normalize_candidate(None) is None
        assert normalize_candidate("./") is None

    def test_trailing_slash_kept_for_directories(self):
        assert normalize_candidate("apps/campaign_compliance/components/") == (
            "apps/campaign_compliance/components/"
        )

    def test_root_must_match_as_prefix(self):
        assert normalize_candidate("applications/x.ts") is None
        assert normalize_candidate(".plan_guard/manifest.json") == ".plan_guard/manifest.json"


def test_bare_paths_inside_urls_or_parent_dirs_are_ignored():
    text = (
        "See https://github.com/org/repo/blob/main/scripts/deploy.js and "
        "../apps/other/index.ts, but keep ./apps/x/a.ts."
    )
    assert extract_plan_paths(text) == ["apps/x/a.ts"]


def test_phase_filter_limits_extraction():
    text = """# PHASE 1 — Skeleton
`apps/x/a.ts`
# PHASE 2 — Data
`db/sql/001_init.sql`
"""
    assert extract_plan_paths(text, phase=1) == ["apps/x/a.ts"]
    assert extract_plan_paths(text, phase=2) == ["db/sql/001_init.sql"]
    assert extract_plan_paths(text, phase=3) == []
    assert extract_plan_paths(text) == ["apps/x/a.ts", "db/sql/001_init.sql"]


def test_parent_references_never_become_required():
    text = "- `apps/../../escaped.txt`\n- bare apps/../outside.ts\n- `scripts/b.js`\n"
    assert extract_plan_paths(text) == ["scripts/b.js"]


def test_directory_with_and_without_slash_counted_once():
    assert extract_plan_paths("`db/sql` and also db/sql/ here") == ["db/sql/"]
    assert extract_plan_paths("`db/sql` only") == ["db/sql"]

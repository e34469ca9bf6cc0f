"""Tests for idiom detection."""

from project_guard.idioms import CATEGORY_RULES, PROJECT_RULES, detect_idioms, rules_for


def kinds(records):
    return [r.kind for r in records]


class TestProjectIdioms:
    def test_state_and_api(self):
        content = "const [count, setCount] = useState(0);\nfetch('/items').then(r => r.json())\n"
        records = detect_idioms(content, "a.jsx")
        assert kinds(records) == ["state-management", "api-call"]
        assert records[0].example == "const [count, setCount] = useState(0);"
        assert records[1].example == "fetch('/items')"
        assert all(r.file == "a.jsx" for r in records)

    def test_missing_example_is_none(self):
        records = detect_idioms("this.setState({ open: true })", "a.js")
        assert kinds(records) == ["state-management"]
        assert records[0].example is None
        assert "example" not in records[0].to_dict()

    def test_styling_and_validation(self):
        content = "<div className='x'/>\nconst schema = yup.object()\n"
        assert kinds(detect_idioms(content, "a.js")) == ["styling", "validation"]

    def test_checks_are_case_sensitive(self):
        assert detect_idioms("USESTATE FETCH CLASSNAME", "a.js") == []

    def test_nothing_detected(self):
        assert detect_idioms("x = 1\n", "a.py") == []

    def test_scoped_rules_do_not_run_without_category(self):
        assert "portal" not in kinds(detect_idioms("createPortal(x)", "a.js"))


class TestCategoryIdioms:
    def test_modal(self):
        content = "useEffect(() => {}); if (key === 'escape') close();\ncreatePortal(<div className='overlay'/>)"
        assert kinds(detect_idioms(content, "m.jsx", category="modal")) == [
            "portal", "keyboard", "backdrop",
        ]

    def test_keyboard_needs_both_needles(self):
        assert kinds(detect_idioms("useEffect(() => {})", "m.js", category="modal")) == []

    def test_form(self):
        content = "const { register } = useForm({ resolver: zodResolver(schema) })\nimport { z } from 'zod'"
        assert kinds(detect_idioms(content, "f.tsx", category="form")) == [
            "form-library", "validation",
        ]

    def test_api_and_service_share_rules(self):
        content = "axios.get(url); fetch(url)"
        assert kinds(detect_idioms(content, "s.js", category="api")) == ["http-client", "fetch-api"]
        assert kinds(detect_idioms(content, "s.js", category="Service")) == ["http-client", "fetch-api"]

    def test_category_without_rules(self):
        assert detect_idioms("createPortal axios useForm", "x.js", category="table") == []


class TestRuleTables:
    def test_project_rules_have_no_categories(self):
        assert rules_for(None) == PROJECT_RULES
        assert all(not r.categories for r in PROJECT_RULES)

    def test_every_category_rule_is_scoped(self):
        assert all(r.categories for r in CATEGORY_RULES)

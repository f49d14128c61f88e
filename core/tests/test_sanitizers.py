from django.test import SimpleTestCase

from core.sanitizers import normalize_tags, parse_csv, sanitize_text, sanitize_title


class SanitizerTests(SimpleTestCase):
    def test_sanitize_text(self):
        self.assertEqual(sanitize_text(None), "")
        self.assertEqual(sanitize_text("  hi\x00 there\n "), "hi there")
        self.assertEqual(sanitize_text("abcdef", max_length=3), "abc")

    def test_sanitize_title_is_single_line(self):
        self.assertEqual(sanitize_title(" Null\n  Pointers "), "Null Pointers")

    def test_normalize_tags(self):
        self.assertEqual(normalize_tags(["React", " react ", "", "Go"]), ["react", "go"])
        self.assertEqual(normalize_tags(None), [])

    def test_parse_csv(self):
        self.assertEqual(parse_csv("react, Django,,"), ["react", "django"])
        self.assertEqual(parse_csv(""), [])

"""Canned engine reports and a fake engine runner for tests."""

import os
from urllib.parse import urlparse, unquote

HEADER = (
    "{vextwarning=false, output=text, lang=en, warning=2, medium=all, profile=css3svg}\n"
    "W3C CSS Validator results for file:/tmp/css_validator.css (CSS level 3 + SVG)\n"
)

VALID_REPORT = HEADER + """
Congratulations! No Error Found.

Valid CSS information
body {
	color : red;
}
"""

SINGLE_ERROR_REPORT = HEADER + """
Sorry! We found the following errors (1)
URI : file:/tmp/css_validator.css
Line : 1 body
         Property “colr” doesn't exist : red

Valid CSS information
"""

MULTIPLE_ERRORS_REPORT = HEADER + """
Sorry! We found the following errors (3)
URI : file:/tmp/css_validator.css
Line : 2 body
         Property “colr” doesn't exist : red
Line : 3 body
         “#GGG” is not a “background-color” value : #GGG
Line : 4 body
         Too many values or values are not recognized : 10px 20px 30px 40px 50px

Valid CSS information
"""

WARNING_REPORT = HEADER + """
Congratulations! No Error Found.

Warnings (1)
URI : file:/tmp/css_validator.css
Line : 1 Value out of range: 300
         rgb(300,100,50)

Valid CSS information
body {
	color : rgb(300,100,50);
}
"""

ERRORS_AND_WARNINGS_REPORT = HEADER + """
Sorry! We found the following errors (1)
URI : file:/tmp/css_validator.css
Line : 1 body
         Property “colr” doesn't exist : red

Warnings (2)
URI : file:/tmp/css_validator.css
Line : 2 Same color for background-color and color
Line : 3 Value out of range: 300
         rgb(300,100,50)

Valid CSS information
"""

UNSTRUCTURED_FAILURE_REPORT = HEADER + """
Sorry! We found the following errors (1)
Parse Error
"""


def uri_to_path(uri: str) -> str:
    """Turn the engine's file URI argument back into a path."""
    return unquote(urlparse(uri).path)


class FakeRunner:
    """Stand-in for the engine process that records each call."""

    def __init__(self, stdout: str = VALID_REPORT, stderr: str = '', exit_code: int = 0,
                 responder=None):
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code
        self.responder = responder
        self.calls = []

    def __call__(self, argv, timeout=None):
        path = uri_to_path(argv[-1])
        existed = os.path.exists(path)
        content = None
        if existed:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        self.calls.append({
            'argv': list(argv),
            'timeout': timeout,
            'path': path,
            'existed': existed,
            'content': content,
        })
        if self.responder:
            return self.responder(content)
        return self.stdout, self.stderr, self.exit_code

    async def run_async(self, argv, timeout=None):
        return self(argv, timeout)


def respond_by_content(content):
    """Pick a canned report from the stylesheet text."""
    if content and 'colr' in content:
        return SINGLE_ERROR_REPORT, '', 1
    return VALID_REPORT, '', 0

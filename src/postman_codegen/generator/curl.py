"""cURL command line."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import one_line, shell_string
from postman_codegen.parser.base import CanonicalRequest


class CurlGenerator(CodeGenerator):
    language_id = "curl"
    label = "cURL"
    extension = "sh"
    implicit_json_content_type = True

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"# {one_line(request.name)}\n"
        if req.method == "HEAD":
            code += f"curl -I {shell_string(req.full_url())}"
        else:
            code += f"curl -X {req.method} {shell_string(req.full_url())}"

        for key, value in req.headers.items():
            code += f" \\\n  -H {shell_string(f'{key}: {value}')}"

        kind = req.body_kind
        if kind == "urlencoded":
            for key, value in req.body.content.items():
                code += f" \\\n  -d {shell_string(f'{key}={value}')}"
        elif kind == "formdata":
            for field in req.body.content:
                value = f"@{field.value}" if field.type == "file" else field.value
                code += f" \\\n  -F {shell_string(f'{field.key}={value}')}"
        elif kind == "json":
            code += f" \\\n  -d {shell_string(req.body_text)}"
        elif kind is not None:
            code += f" \\\n  --data-raw {shell_string(req.body_text)}"

        return code + "\n"

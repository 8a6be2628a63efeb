"""JavaScript snippet using the browser Fetch API."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, js_string, one_line, render_value
from postman_codegen.parser.base import CanonicalRequest

JS_STYLE = LiteralStyle(quote=js_string)


class JavaScriptFetchGenerator(CodeGenerator):
    language_id = "javascript-fetch"
    label = "JavaScript (Fetch)"
    extension = "js"
    implicit_json_content_type = True

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        # fetch is the only target that percent-encodes query params
        code = f"// {one_line(request.name)}\n"
        code += f"const url = {js_string(req.full_url(encode=True))};\n\n"

        if req.headers:
            code += f"const headers = {render_value(req.headers, JS_STYLE)};\n\n"

        if req.body_kind == "formdata":
            code += "const formData = new FormData();\n"
            for field in req.body.content:
                code += f"formData.append({js_string(field.key)}, {js_string(field.value)});\n"
            code += "\n"

        code += "const options = {\n"
        code += f"  method: {js_string(req.method)}"
        if req.headers:
            code += ",\n  headers: headers"
        body = self._render_body(req)
        if body:
            code += f",\n  body: {body}"
        code += "\n};\n\n"

        code += "fetch(url, options)\n"
        code += "  .then(response => {\n"
        code += "    if (!response.ok) {\n"
        code += "      throw new Error(`HTTP error! status: ${response.status}`);\n"
        code += "    }\n"
        code += "    return response.json();\n"
        code += "  })\n"
        code += "  .then(data => {\n"
        code += "    console.log('Success:', data);\n"
        code += "  })\n"
        code += "  .catch(error => {\n"
        code += "    console.error('Error:', error);\n"
        code += "  });\n"
        return code

    def _render_body(self, req: AssembledRequest) -> str:
        kind = req.body_kind
        if kind is None:
            return ""
        if kind == "json":
            return f"JSON.stringify({render_value(req.body.content, JS_STYLE, 1)})"
        if kind == "urlencoded":
            return f"new URLSearchParams({render_value(req.body.content, JS_STYLE, 1)})"
        if kind == "formdata":
            return "formData"
        return js_string(req.body_text)

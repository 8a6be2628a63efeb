"""Node.js snippet using axios."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.javascript import JS_STYLE
from postman_codegen.generator.literals import js_string, one_line, render_value
from postman_codegen.parser.base import CanonicalRequest


class NodeAxiosGenerator(CodeGenerator):
    language_id = "nodejs"
    label = "Node.js (Axios)"
    extension = "js"
    implicit_json_content_type = True

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"// {one_line(request.name)}\n"
        code += "const axios = require('axios');\n"
        if req.body_kind == "formdata":
            code += "const FormData = require('form-data');\n\n"
            code += "const form = new FormData();\n"
            for field in req.body.content:
                code += f"form.append({js_string(field.key)}, {js_string(field.value)});\n"
        code += "\n"

        code += "const config = {\n"
        code += f"  method: {js_string(req.method.lower())},\n"
        code += f"  url: {js_string(req.url)}"
        if req.query_params:
            code += f",\n  params: {render_value(req.query_params, JS_STYLE, 1)}"
        if req.headers:
            code += f",\n  headers: {render_value(req.headers, JS_STYLE, 1)}"
        data = self._render_data(req)
        if data:
            code += f",\n  data: {data}"
        code += "\n};\n\n"

        code += "axios(config)\n"
        code += "  .then(response => {\n"
        code += "    console.log('Status:', response.status);\n"
        code += "    console.log('Data:', response.data);\n"
        code += "  })\n"
        code += "  .catch(error => {\n"
        code += "    if (error.response) {\n"
        code += "      console.error('Error:', error.response.status, error.response.data);\n"
        code += "    } else {\n"
        code += "      console.error('Error:', error.message);\n"
        code += "    }\n"
        code += "  });\n"
        return code

    def _render_data(self, req: AssembledRequest) -> str:
        kind = req.body_kind
        if kind is None:
            return ""
        if kind == "json":
            return render_value(req.body.content, JS_STYLE, 1)
        if kind == "urlencoded":
            return f"new URLSearchParams({render_value(req.body.content, JS_STYLE, 1)})"
        if kind == "formdata":
            return "form"
        return js_string(req.body_text)

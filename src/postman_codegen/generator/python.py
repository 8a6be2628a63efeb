"""Python snippet using requests."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, one_line, python_string, render_value
from postman_codegen.parser.base import CanonicalRequest

PYTHON_STYLE = LiteralStyle(quote=python_string, true="True", false="False", null="None", indent="    ")


class PythonRequestsGenerator(CodeGenerator):
    language_id = "python"
    label = "Python (Requests)"
    extension = "py"
    implicit_json_content_type = True

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"# {one_line(request.name)}\n"
        code += "import requests\n\n"
        code += f"url = {python_string(req.url)}\n\n"

        args = ["url"]
        if req.query_params:
            code += f"params = {render_value(req.query_params, PYTHON_STYLE)}\n\n"
            args.append("params=params")
        if req.headers:
            code += f"headers = {render_value(req.headers, PYTHON_STYLE)}\n\n"
            args.append("headers=headers")

        kind = req.body_kind
        if kind == "json":
            code += f"payload = {render_value(req.body.content, PYTHON_STYLE)}\n\n"
            args.append("json=payload")
        elif kind == "urlencoded":
            code += f"payload = {render_value(req.body.content, PYTHON_STYLE)}\n\n"
            args.append("data=payload")
        elif kind == "formdata":
            code += f"files = {self._render_files(req)}\n\n"
            args.append("files=files")
        elif kind is not None:
            code += f"payload = {python_string(req.body_text)}\n\n"
            args.append("data=payload")

        code += "try:\n"
        code += f"    response = requests.{req.method.lower()}(\n"
        for arg in args:
            code += f"        {arg},\n"
        code += "    )\n"
        code += "    response.raise_for_status()\n"
        code += '    print("Success:", response.json())\n'
        code += "except requests.exceptions.RequestException as e:\n"
        code += '    print(f"Error: {e}")\n'
        return code

    def _render_files(self, req: AssembledRequest) -> str:
        if not req.body.content:
            return "{}"
        lines = []
        for field in req.body.content:
            if field.type == "file":
                value = f"open({python_string(field.value)}, \"rb\")"
            else:
                value = f"(None, {python_string(field.value)})"
            lines.append(f"    {python_string(field.key)}: {value}")
        return "{\n" + ",\n".join(lines) + "\n}"

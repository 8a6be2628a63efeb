"""Go snippet using net/http."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import c_string, one_line
from postman_codegen.parser.base import CanonicalRequest


def go_string(text: str) -> str:
    """Prefer a raw string literal; backquotes force an interpreted one."""
    if "`" in text or "\r" in text:
        return c_string(text)
    return f"`{text}`"


class GoHttpGenerator(CodeGenerator):
    language_id = "go"
    label = "Go (net/http)"
    extension = "go"
    urlencoded_content_type = True

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        imports = {"fmt", "io", "net/http", "time"}
        body = ""
        kind = req.body_kind
        if kind == "urlencoded":
            imports.update({"net/url", "strings"})
            body = "\tform := url.Values{}\n"
            for key, value in req.body.content.items():
                body += f"\tform.Set({c_string(key)}, {c_string(value)})\n"
            body += "\treqBody := strings.NewReader(form.Encode())\n\n"
        elif kind == "json":
            imports.add("strings")
            body = f"\treqBody := strings.NewReader({go_string(req.body_text)})\n\n"
        elif kind is not None:
            imports.add("strings")
            body = f"\treqBody := strings.NewReader({c_string(req.body_text)})\n\n"

        code = f"// {one_line(request.name)}\n"
        code += "package main\n\n"
        code += "import (\n"
        for name in sorted(imports):
            code += f'\t"{name}"\n'
        code += ")\n\n"

        code += "func main() {\n"
        code += body
        reader = "reqBody" if body else "nil"
        code += f"\treq, err := http.NewRequest({c_string(req.method)}, {c_string(req.full_url())}, {reader})\n"
        code += "\tif err != nil {\n"
        code += '\t\tfmt.Println("Error creating request:", err)\n'
        code += "\t\treturn\n"
        code += "\t}\n\n"

        for key, value in req.headers.items():
            code += f"\treq.Header.Set({c_string(key)}, {c_string(value)})\n"
        if req.headers:
            code += "\n"

        code += "\tclient := &http.Client{\n"
        code += "\t\tTimeout: 30 * time.Second,\n"
        code += "\t}\n\n"
        code += "\tresp, err := client.Do(req)\n"
        code += "\tif err != nil {\n"
        code += '\t\tfmt.Println("Error making request:", err)\n'
        code += "\t\treturn\n"
        code += "\t}\n"
        code += "\tdefer resp.Body.Close()\n\n"
        code += "\tbody, err := io.ReadAll(resp.Body)\n"
        code += "\tif err != nil {\n"
        code += '\t\tfmt.Println("Error reading response:", err)\n'
        code += "\t\treturn\n"
        code += "\t}\n\n"
        code += '\tfmt.Println("Status Code:", resp.StatusCode)\n'
        code += '\tfmt.Println("Response:", string(body))\n'
        code += "}\n"
        return code

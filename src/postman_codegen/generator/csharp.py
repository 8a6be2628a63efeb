"""C# snippet using System.Net.Http.HttpClient."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, c_string, one_line, render_value
from postman_codegen.parser.base import CanonicalRequest

CSHARP_STYLE = LiteralStyle(
    quote=c_string,
    map_open="new Dictionary<string, object> {",
    empty_map="new Dictionary<string, object>()",
    list_open="new object[] {",
    list_close="}",
    empty_list="new object[0]",
    pair=" = ",
    key=lambda k: f"[{c_string(k)}]",
    indent="    ",
)

_INDENT = "            "


class CSharpHttpClientGenerator(CodeGenerator):
    language_id = "csharp"
    label = "C# (HttpClient)"
    extension = "cs"

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"// {one_line(request.name)}\n"
        code += "using System;\n"
        code += "using System.Collections.Generic;\n"
        code += "using System.IO;\n"
        code += "using System.Net.Http;\n"
        code += "using System.Text;\n"
        code += "using System.Text.Json;\n"
        code += "using System.Threading.Tasks;\n\n"

        code += "namespace ApiClient\n"
        code += "{\n"
        code += "    class Program\n"
        code += "    {\n"
        code += "        static async Task Main(string[] args)\n"
        code += "        {\n"
        code += f"{_INDENT}using var client = new HttpClient();\n"
        code += f"{_INDENT}client.Timeout = TimeSpan.FromSeconds(30);\n\n"

        code += (
            f"{_INDENT}using var request = new HttpRequestMessage("
            f"new HttpMethod({c_string(req.method)}), {c_string(req.full_url())});\n"
        )
        for key, value in req.headers.items():
            # content headers belong to request.Content
            if key.lower() == "content-type":
                continue
            code += f"{_INDENT}request.Headers.TryAddWithoutValidation({c_string(key)}, {c_string(value)});\n"
        code += "\n"

        content = self._render_content(req)
        if content:
            code += content + "\n"

        code += f"{_INDENT}try\n"
        code += f"{_INDENT}{{\n"
        code += f"{_INDENT}    using var response = await client.SendAsync(request);\n"
        code += f"{_INDENT}    response.EnsureSuccessStatusCode();\n"
        code += f"{_INDENT}    var responseBody = await response.Content.ReadAsStringAsync();\n\n"
        code += f'{_INDENT}    Console.WriteLine($"Status Code: {{(int)response.StatusCode}}");\n'
        code += f'{_INDENT}    Console.WriteLine($"Response: {{responseBody}}");\n'
        code += f"{_INDENT}}}\n"
        code += f"{_INDENT}catch (HttpRequestException e)\n"
        code += f"{_INDENT}{{\n"
        code += f'{_INDENT}    Console.WriteLine($"Error: {{e.Message}}");\n'
        code += f"{_INDENT}}}\n"
        code += "        }\n"
        code += "    }\n"
        code += "}\n"
        return code

    def _render_content(self, req: AssembledRequest) -> str:
        kind = req.body_kind
        if kind is None:
            return ""
        if kind == "json":
            code = f"{_INDENT}object requestData = {render_value(req.body.content, CSHARP_STYLE, 3)};\n"
            code += (
                f"{_INDENT}request.Content = new StringContent("
                f'JsonSerializer.Serialize(requestData), Encoding.UTF8, "application/json");\n'
            )
            return code
        if kind == "urlencoded":
            code = f"{_INDENT}var formData = new Dictionary<string, string>\n"
            code += f"{_INDENT}{{\n"
            entries = [
                f"{_INDENT}    {{ {c_string(k)}, {c_string(v)} }}" for k, v in req.body.content.items()
            ]
            if entries:
                code += ",\n".join(entries) + "\n"
            code += f"{_INDENT}}};\n"
            code += f"{_INDENT}request.Content = new FormUrlEncodedContent(formData);\n"
            return code
        if kind == "formdata":
            code = f"{_INDENT}var multipart = new MultipartFormDataContent();\n"
            for field in req.body.content:
                if field.type == "file":
                    part = f"new StreamContent(File.OpenRead({c_string(field.value)}))"
                    name = c_string(field.value.replace("\\", "/").rsplit("/", 1)[-1])
                    code += f"{_INDENT}multipart.Add({part}, {c_string(field.key)}, {name});\n"
                else:
                    code += f"{_INDENT}multipart.Add(new StringContent({c_string(field.value)}), {c_string(field.key)});\n"
            code += f"{_INDENT}request.Content = multipart;\n"
            return code
        media_type = (req.header("Content-Type") or req.body.content_type).split(";")[0].strip()
        return (
            f"{_INDENT}request.Content = new StringContent("
            f"{c_string(req.body_text)}, Encoding.UTF8, {c_string(media_type)});\n"
        )

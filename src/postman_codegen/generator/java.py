"""Java snippet using java.net.http.HttpClient (Java 11+)."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import c_string, one_line
from postman_codegen.parser.base import CanonicalRequest

# HttpRequest.Builder has shortcut methods only for these
_BUILDER_METHODS = {"POST", "PUT"}


class JavaHttpClientGenerator(CodeGenerator):
    language_id = "java"
    label = "Java (HttpClient)"
    extension = "java"
    urlencoded_content_type = True

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"// {one_line(request.name)}\n"
        code += "import java.net.URI;\n"
        code += "import java.net.http.HttpClient;\n"
        code += "import java.net.http.HttpRequest;\n"
        code += "import java.net.http.HttpResponse;\n"
        code += "import java.time.Duration;\n\n"

        code += "public class ApiRequest {\n"
        code += "    public static void main(String[] args) {\n"
        code += "        try {\n"
        code += "            HttpClient client = HttpClient.newBuilder()\n"
        code += "                .connectTimeout(Duration.ofSeconds(30))\n"
        code += "                .build();\n\n"

        code += "            HttpRequest request = HttpRequest.newBuilder()\n"
        code += f"                .uri(URI.create({c_string(req.full_url())}))\n"
        code += "                .timeout(Duration.ofSeconds(30))"
        for key, value in req.headers.items():
            code += f"\n                .header({c_string(key)}, {c_string(value)})"
        code += f"\n                {self._render_method(req)}\n"
        code += "                .build();\n\n"

        code += "            HttpResponse<String> response = client.send(\n"
        code += "                request,\n"
        code += "                HttpResponse.BodyHandlers.ofString()\n"
        code += "            );\n\n"
        code += '            System.out.println("Status Code: " + response.statusCode());\n'
        code += '            System.out.println("Response Body: " + response.body());\n'
        code += "        } catch (Exception e) {\n"
        code += '            System.err.println("Error: " + e.getMessage());\n'
        code += "            e.printStackTrace();\n"
        code += "        }\n"
        code += "    }\n"
        code += "}\n"
        return code

    def _render_method(self, req: AssembledRequest) -> str:
        method = req.method
        if req.body is None:
            if method in ("GET", "DELETE"):
                return f".{method}()"
            publisher = "HttpRequest.BodyPublishers.noBody()"
        else:
            # JSON and form bodies alike go out as an escaped string literal
            publisher = f"HttpRequest.BodyPublishers.ofString({c_string(req.body_text)})"
        if method in _BUILDER_METHODS:
            return f".{method}({publisher})"
        return f".method({c_string(method)}, {publisher})"

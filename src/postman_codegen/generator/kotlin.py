"""Kotlin snippet using OkHttp."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import kotlin_string, one_line
from postman_codegen.parser.base import CanonicalRequest

_BODY_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class KotlinOkHttpGenerator(CodeGenerator):
    language_id = "kotlin"
    label = "Kotlin (OkHttp)"
    extension = "kt"

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"// {one_line(request.name)}\n"
        code += "import okhttp3.*\n"
        code += "import okhttp3.MediaType.Companion.toMediaType\n"
        code += "import okhttp3.RequestBody.Companion.asRequestBody\n"
        code += "import okhttp3.RequestBody.Companion.toRequestBody\n"
        code += "import java.io.File\n"
        code += "import java.io.IOException\n"
        code += "import java.util.concurrent.TimeUnit\n\n"

        code += "fun main() {\n"
        code += "    val client = OkHttpClient.Builder()\n"
        code += "        .connectTimeout(30, TimeUnit.SECONDS)\n"
        code += "        .readTimeout(30, TimeUnit.SECONDS)\n"
        code += "        .build()\n\n"

        code += self._render_body(req)

        code += "    val request = Request.Builder()\n"
        code += f"        .url({kotlin_string(req.full_url())})\n"
        for key, value in req.headers.items():
            code += f"        .addHeader({kotlin_string(key)}, {kotlin_string(value)})\n"
        code += f"        {self._render_method(req)}\n"
        code += "        .build()\n\n"

        code += "    try {\n"
        code += "        client.newCall(request).execute().use { response ->\n"
        code += "            if (!response.isSuccessful) {\n"
        code += '                println("Error: ${response.code} ${response.message}")\n'
        code += "                return@use\n"
        code += "            }\n\n"
        code += '            println("Status Code: ${response.code}")\n'
        code += '            println("Response: ${response.body?.string()}")\n'
        code += "        }\n"
        code += "    } catch (e: IOException) {\n"
        code += '        println("Network error: ${e.message}")\n'
        code += "        e.printStackTrace()\n"
        code += "    }\n"
        code += "}\n"
        return code

    def _render_body(self, req: AssembledRequest) -> str:
        kind = req.body_kind
        if kind is None:
            return ""
        if kind == "urlencoded":
            code = "    val requestBody = FormBody.Builder()\n"
            for key, value in req.body.content.items():
                code += f"        .add({kotlin_string(key)}, {kotlin_string(value)})\n"
            return code + "        .build()\n\n"
        if kind == "formdata":
            code = "    val requestBody = MultipartBody.Builder()\n"
            code += "        .setType(MultipartBody.FORM)\n"
            for field in req.body.content:
                key = kotlin_string(field.key)
                if field.type == "file":
                    path = kotlin_string(field.value)
                    code += (
                        f"        .addFormDataPart({key}, File({path}).name, "
                        f'File({path}).asRequestBody("application/octet-stream".toMediaType()))\n'
                    )
                else:
                    code += f"        .addFormDataPart({key}, {kotlin_string(field.value)})\n"
            return code + "        .build()\n\n"
        media_type = "application/json; charset=utf-8" if kind == "json" else req.body.content_type
        code = f"    val mediaType = {kotlin_string(media_type)}.toMediaType()\n"
        code += f"    val requestBody = {kotlin_string(req.body_text)}.toRequestBody(mediaType)\n\n"
        return code

    def _render_method(self, req: AssembledRequest) -> str:
        method = req.method
        if req.body is not None:
            if method in _BODY_METHODS:
                return f".{method.lower()}(requestBody)"
            return f".method({kotlin_string(method)}, requestBody)"
        if method in ("GET", "HEAD", "DELETE"):
            return f".{method.lower()}()"
        if method in _BODY_METHODS:
            return f'.{method.lower()}("".toRequestBody())'
        return f".method({kotlin_string(method)}, null)"

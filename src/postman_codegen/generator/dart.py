"""Dart snippet using the dio package."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, dart_string, one_line, render_value
from postman_codegen.parser.base import CanonicalRequest

DART_STYLE = LiteralStyle(quote=dart_string)


class DartDioGenerator(CodeGenerator):
    language_id = "dart"
    label = "Dart (dio)"
    extension = "dart"

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"// {one_line(request.name)}\n"
        code += "import 'package:dio/dio.dart';\n\n"

        code += "void main() async {\n"
        code += "  final dio = Dio(\n"
        code += "    BaseOptions(\n"
        code += "      connectTimeout: const Duration(seconds: 30),\n"
        code += "      receiveTimeout: const Duration(seconds: 30),\n"
        code += "    ),\n"
        code += "  );\n\n"

        args = [dart_string(req.url)]
        if req.headers:
            code += f"  final headers = {render_value(req.headers, DART_STYLE, 1)};\n\n"
        if req.query_params:
            code += f"  final queryParams = {render_value(req.query_params, DART_STYLE, 1)};\n\n"

        data = self._render_data(req)
        if data:
            code += f"  final data = {data};\n\n"
            args.append("data: data")
        if req.query_params:
            args.append("queryParameters: queryParams")
        options = f"method: {dart_string(req.method)}"
        if req.headers:
            options += ", headers: headers"
        args.append(f"options: Options({options})")

        code += "  try {\n"
        code += "    final response = await dio.request(\n"
        for arg in args:
            code += f"      {arg},\n"
        code += "    );\n\n"
        code += "    print('Status Code: ${response.statusCode}');\n"
        code += "    print('Response: ${response.data}');\n"
        code += "  } on DioException catch (e) {\n"
        code += "    if (e.response != null) {\n"
        code += "      print('Error: ${e.response?.statusCode} - ${e.response?.data}');\n"
        code += "    } else {\n"
        code += "      print('Error: ${e.message}');\n"
        code += "    }\n"
        code += "  } catch (e) {\n"
        code += "    print('Unexpected error: $e');\n"
        code += "  }\n"
        code += "}\n\n"

        code += "/*\nAdd to pubspec.yaml:\n\n"
        code += "dependencies:\n"
        code += "  dio: ^5.0.0\n"
        code += "*/\n"
        return code

    def _render_data(self, req: AssembledRequest) -> str:
        kind = req.body_kind
        if kind is None:
            return ""
        if kind == "json":
            return render_value(req.body.content, DART_STYLE, 1)
        if kind == "urlencoded":
            return f"FormData.fromMap({render_value(req.body.content, DART_STYLE, 1)})"
        if kind == "formdata":
            if not req.body.content:
                return "FormData()"
            lines = []
            for field in req.body.content:
                if field.type == "file":
                    value = f"await MultipartFile.fromFile({dart_string(field.value)})"
                else:
                    value = dart_string(field.value)
                lines.append(f"    {dart_string(field.key)}: {value}")
            return "FormData.fromMap({\n" + ",\n".join(lines) + "\n  })"
        return dart_string(req.body_text)

"""PHP snippet using the cURL extension."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, one_line, php_string, render_value
from postman_codegen.parser.base import CanonicalRequest

PHP_STYLE = LiteralStyle(
    quote=php_string,
    map_open="[",
    map_close="]",
    empty_map="new \\stdClass()",
    pair=" => ",
    indent="    ",
)


class PhpCurlGenerator(CodeGenerator):
    language_id = "php"
    label = "PHP (cURL)"
    extension = "php"

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = "<?php\n"
        code += f"// {one_line(request.name)}\n\n"
        code += "$curl = curl_init();\n\n"

        code += "$options = [\n"
        code += f"    CURLOPT_URL => {php_string(req.full_url())},\n"
        code += "    CURLOPT_RETURNTRANSFER => true,\n"
        code += '    CURLOPT_ENCODING => "",\n'
        code += "    CURLOPT_MAXREDIRS => 10,\n"
        code += "    CURLOPT_TIMEOUT => 30,\n"
        code += "    CURLOPT_HTTP_VERSION => CURL_HTTP_VERSION_1_1,\n"
        code += f"    CURLOPT_CUSTOMREQUEST => {php_string(req.method)},\n"
        if req.method == "HEAD":
            code += "    CURLOPT_NOBODY => true,\n"

        fields = self._render_postfields(req)
        if fields:
            code += f"    CURLOPT_POSTFIELDS => {fields},\n"

        if req.headers:
            code += "    CURLOPT_HTTPHEADER => [\n"
            for key, value in req.headers.items():
                code += f"        {php_string(f'{key}: {value}')},\n"
            code += "    ],\n"
        code += "];\n\n"

        code += "curl_setopt_array($curl, $options);\n\n"
        code += "$response = curl_exec($curl);\n"
        code += "$error = curl_error($curl);\n"
        code += "$httpCode = curl_getinfo($curl, CURLINFO_HTTP_CODE);\n\n"
        code += "curl_close($curl);\n\n"
        code += "if ($error) {\n"
        code += '    echo "cURL Error: " . $error . "\\n";\n'
        code += "} else {\n"
        code += '    echo "HTTP Code: " . $httpCode . "\\n";\n'
        code += '    echo "Response: " . $response . "\\n";\n'
        code += "    $data = json_decode($response, true);\n"
        code += "    print_r($data);\n"
        code += "}\n"
        return code

    def _render_postfields(self, req: AssembledRequest) -> str:
        kind = req.body_kind
        if kind is None:
            return ""
        if kind == "json":
            return f"json_encode({render_value(req.body.content, PHP_STYLE, 1)})"
        if kind == "urlencoded":
            return f"http_build_query({render_value(req.body.content, PHP_STYLE, 1)})"
        if kind == "formdata":
            # an array makes cURL send multipart/form-data
            if not req.body.content:
                return "[]"
            lines = []
            for field in req.body.content:
                if field.type == "file":
                    value = f"new CURLFile({php_string(field.value)})"
                else:
                    value = php_string(field.value)
                lines.append(f"        {php_string(field.key)} => {value}")
            return "[\n" + ",\n".join(lines) + "\n    ]"
        return php_string(req.body_text)

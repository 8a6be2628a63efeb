"""Ruby snippet using HTTParty."""

from urllib.parse import urlsplit

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, one_line, render_value, ruby_string
from postman_codegen.parser.base import CanonicalRequest

RUBY_STYLE = LiteralStyle(quote=ruby_string, null="nil", pair=" => ")


def split_base_uri(url: str) -> tuple[str | None, str]:
    """Split a URL into HTTParty's base_uri and request path.

    URLs without scheme and host have no base; the whole string becomes the path.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None, url
    if not parts.scheme or not parts.netloc:
        return None, url
    return f"{parts.scheme}://{parts.netloc}", parts.path or "/"


class RubyHTTPartyGenerator(CodeGenerator):
    language_id = "ruby"
    label = "Ruby (HTTParty)"
    extension = "rb"

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        base_uri, path = split_base_uri(req.url)

        code = f"# {one_line(request.name)}\n"
        code += "require 'httparty'\n"
        code += "require 'json'\n\n"
        code += "class ApiClient\n"
        code += "  include HTTParty\n"
        if base_uri:
            code += f"  base_uri {ruby_string(base_uri)}\n"
        code += "\n"

        code += "  def self.make_request\n"
        options = []
        if req.headers:
            options.append(f"      headers: {render_value(req.headers, RUBY_STYLE, 3)}")
        if req.query_params:
            options.append(f"      query: {render_value(req.query_params, RUBY_STYLE, 3)}")
        body = self._render_body(req)
        if body:
            options.append(f"      body: {body}")
        if options:
            code += "    options = {\n" + ",\n".join(options) + "\n    }\n\n"
        else:
            code += "    options = {}\n\n"

        code += f"    response = {req.method.lower()}({ruby_string(path)}, options)\n\n"
        code += "    if response.success?\n"
        code += '      puts "Status: #{response.code}"\n'
        code += '      puts "Response: #{response.body}"\n'
        code += "      response.parsed_response\n"
        code += "    else\n"
        code += '      puts "Error: #{response.code} - #{response.message}"\n'
        code += "      nil\n"
        code += "    end\n"
        code += "  rescue StandardError => e\n"
        code += '    puts "Exception: #{e.message}"\n'
        code += "    nil\n"
        code += "  end\n"
        code += "end\n\n"
        code += "ApiClient.make_request\n"
        return code

    def _render_body(self, req: AssembledRequest) -> str:
        kind = req.body_kind
        if kind is None:
            return ""
        if kind == "json":
            return f"{render_value(req.body.content, RUBY_STYLE, 3)}.to_json"
        if kind == "urlencoded":
            return render_value(req.body.content, RUBY_STYLE, 3)
        if kind == "formdata":
            fields = {}
            lines = []
            for field in req.body.content:
                if field.type == "file":
                    value = f"File.open({ruby_string(field.value)})"
                else:
                    value = ruby_string(field.value)
                fields[field.key] = value
            for key, value in fields.items():
                lines.append(f"        {ruby_string(key)} => {value}")
            if not lines:
                return "{}"
            return "{\n" + ",\n".join(lines) + "\n      }"
        return ruby_string(req.body_text)

"""Rust snippet using reqwest and tokio."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, c_string, one_line, render_value
from postman_codegen.parser.base import CanonicalRequest

# serde_json's json! macro takes JSON syntax with Rust string literals
RUST_STYLE = LiteralStyle(quote=c_string, indent="    ")


class RustReqwestGenerator(CodeGenerator):
    language_id = "rust"
    label = "Rust (reqwest)"
    extension = "rs"

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        kind = req.body_kind
        code = f"// {one_line(request.name)}\n"
        if kind == "json":
            code += "use serde_json::json;\n"
        code += "use std::time::Duration;\n\n"

        code += "#[tokio::main]\n"
        code += "async fn main() -> Result<(), Box<dyn std::error::Error>> {\n"
        code += "    let client = reqwest::Client::builder()\n"
        code += "        .timeout(Duration::from_secs(30))\n"
        code += "        .build()?;\n\n"
        code += f"    let url = {c_string(req.url)};\n"
        if req.query_params:
            code += f"    let params = {self._tuples(req.query_params)};\n"
        if kind == "urlencoded" and req.body.content:
            code += f"    let form = {self._tuples(req.body.content)};\n"
        code += "\n"

        code += "    let request = client\n"
        code += f"        .request(reqwest::Method::{req.method}, url)"
        if req.query_params:
            code += "\n        .query(&params)"
        for key, value in req.headers.items():
            code += f"\n        .header({c_string(key)}, {c_string(value)})"
        if kind == "json":
            code += f"\n        .json(&json!({render_value(req.body.content, RUST_STYLE, 2)}))"
        elif kind == "urlencoded" and req.body.content:
            code += "\n        .form(&form)"
        elif kind is not None:
            code += f"\n        .body({c_string(req.body_text)})"
        code += ";\n\n"

        code += "    match request.send().await {\n"
        code += "        Ok(response) => {\n"
        code += '            println!("Status: {}", response.status());\n'
        code += "            match response.text().await {\n"
        code += '                Ok(body) => println!("Response: {}", body),\n'
        code += '                Err(e) => eprintln!("Error reading response: {}", e),\n'
        code += "            }\n"
        code += "        }\n"
        code += '        Err(e) => eprintln!("Request error: {}", e),\n'
        code += "    }\n\n"
        code += "    Ok(())\n"
        code += "}\n\n"

        code += "/*\nAdd to Cargo.toml:\n\n"
        code += "[dependencies]\n"
        code += 'reqwest = { version = "0.12", features = ["json"] }\n'
        code += 'tokio = { version = "1", features = ["full"] }\n'
        if kind == "json":
            code += 'serde_json = "1.0"\n'
        code += "*/\n"
        return code

    def _tuples(self, pairs: dict[str, str]) -> str:
        lines = [f"        ({c_string(k)}, {c_string(v)})," for k, v in pairs.items()]
        return "[\n" + "\n".join(lines) + "\n    ]"

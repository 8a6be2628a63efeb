"""Swift snippet using Foundation's URLSession."""

from postman_codegen.generator.base import AssembledRequest, CodeGenerator
from postman_codegen.generator.literals import LiteralStyle, c_string, one_line, render_value
from postman_codegen.parser.base import CanonicalRequest

# nested heterogeneous literals need an explicit type in Swift
SWIFT_STYLE = LiteralStyle(
    quote=c_string,
    null="NSNull()",
    map_open="[",
    map_close="] as [String: Any]",
    empty_map="[String: Any]()",
    list_close="] as [Any]",
    empty_list="[Any]()",
    indent="    ",
)


class SwiftURLSessionGenerator(CodeGenerator):
    language_id = "swift"
    label = "Swift (URLSession)"
    extension = "swift"
    urlencoded_content_type = True

    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        code = f"// {one_line(request.name)}\n"
        code += "import Foundation\n\n"

        code += "func makeRequest(completion: @escaping () -> Void) {\n"
        code += f"    guard let url = URL(string: {c_string(req.full_url())}) else {{\n"
        code += '        print("Invalid URL")\n'
        code += "        completion()\n"
        code += "        return\n"
        code += "    }\n\n"
        code += "    var request = URLRequest(url: url)\n"
        code += f"    request.httpMethod = {c_string(req.method)}\n"
        code += "    request.timeoutInterval = 30\n\n"

        if req.headers:
            for key, value in req.headers.items():
                code += f"    request.setValue({c_string(value)}, forHTTPHeaderField: {c_string(key)})\n"
            code += "\n"

        kind = req.body_kind
        if kind == "json":
            code += f"    let requestBody: Any = {render_value(req.body.content, SWIFT_STYLE, 1)}\n"
            code += "    do {\n"
            code += "        request.httpBody = try JSONSerialization.data(withJSONObject: requestBody, options: [.fragmentsAllowed])\n"
            code += "    } catch {\n"
            code += '        print("Error serializing JSON: \\(error)")\n'
            code += "        completion()\n"
            code += "        return\n"
            code += "    }\n\n"
        elif kind is not None:
            code += f"    request.httpBody = {c_string(req.body_text)}.data(using: .utf8)\n\n"

        code += "    let task = URLSession.shared.dataTask(with: request) { data, response, error in\n"
        code += "        defer { completion() }\n"
        code += "        if let error = error {\n"
        code += '            print("Error: \\(error.localizedDescription)")\n'
        code += "            return\n"
        code += "        }\n\n"
        code += "        guard let httpResponse = response as? HTTPURLResponse else {\n"
        code += '            print("Invalid response")\n'
        code += "            return\n"
        code += "        }\n\n"
        code += '        print("Status Code: \\(httpResponse.statusCode)")\n'
        code += "        if let data = data, let responseString = String(data: data, encoding: .utf8) {\n"
        code += '            print("Response: \\(responseString)")\n'
        code += "        }\n"
        code += "    }\n\n"
        code += "    task.resume()\n"
        code += "}\n\n"

        code += "let semaphore = DispatchSemaphore(value: 0)\n"
        code += "makeRequest { semaphore.signal() }\n"
        code += "semaphore.wait()\n"
        return code

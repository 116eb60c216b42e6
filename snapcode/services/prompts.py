# FILE: snapcode/services/prompts.py
"""
Prompt templates for code generation, image description and repair
"""
import textwrap
from typing import Optional

CODING_PROMPT = """
You are an expert frontend React developer. You will be given an image (screenshot, sketch, wireframe, or mockup) and you will return FULLY FUNCTIONAL, INTERACTIVE React code using React and Tailwind CSS. Follow the instructions carefully:

- Create a COMPLETE, INTERACTIVE React application, not a static mockup. Buttons should be clickable, forms should work, navigation should switch content, and interactive elements should have proper state management.
- Transform sketches, wireframes and rough mockups into polished, professional web interfaces.
- Analyze the provided image carefully and think step by step about how to recreate the UI shown.
- The component must run by itself through a default export and must not require any props.
- Feel free to have multiple components in the file, but have one main component that uses all the other components.
- Match background color, text color, font size, font family, padding, margin and borders as closely as possible.
- Code every part of what you see, including headers, footers, navigation and content areas.
- Use any text you can read from the image. If text is unclear, use appropriate placeholder text.
- Do not leave comments such as "<!-- Repeat for each item -->" in place of code. WRITE THE FULL CODE. If there are 15 items visible, the code should have 15 items.
- For all images, use an svg with a white, gray, or black background; do not import images locally or from the internet.
- Add realistic functionality: a search bar should filter results, tabs should switch content, buttons should do something meaningful.
- If you use anything from React like useState or useEffect, import it directly.
- Use TypeScript as the language for the React component.
- Use Tailwind classes for styling. DO NOT USE ARBITRARY VALUES (e.g. `h-[600px]`). Use a consistent color palette.
- Use margin and padding so the components are spaced out nicely.
- ONLY return the full React code starting with the imports, nothing else. DO NOT START WITH ```typescript or ```tsx or ```.
- ONLY IF the user asks for a dashboard, graph or chart, the recharts library is available, e.g. `import { LineChart, XAxis, ... } from "recharts"`.
- If you need an icon, import it from a library or create an SVG for it.
- Do not put borders around the entire website even if that's described.
"""

NO_OTHER_LIBRARIES = """
NO OTHER LIBRARIES (e.g. zod, hookform) ARE INSTALLED OR ABLE TO BE IMPORTED.
"""

# Pre-styled components offered when the component library flag is set
COMPONENT_LIBRARY = (
    {
        "name": "Button",
        "import": 'import { Button } from "@/components/ui/button"',
        "usage": '<Button variant="outline">Button</Button>',
    },
    {
        "name": "Card",
        "import": 'import { Card, CardContent, CardDescription, CardFooter, CardHeader, CardTitle } from "@/components/ui/card"',
        "usage": "<Card>\n  <CardHeader>\n    <CardTitle>Card Title</CardTitle>\n"
                 "    <CardDescription>Card Description</CardDescription>\n  </CardHeader>\n"
                 "  <CardContent>Card Content</CardContent>\n  <CardFooter>Card Footer</CardFooter>\n</Card>",
    },
    {
        "name": "Input",
        "import": 'import { Input } from "@/components/ui/input"',
        "usage": '<Input type="email" placeholder="Email" />',
    },
    {
        "name": "Label",
        "import": 'import { Label } from "@/components/ui/label"',
        "usage": '<Label htmlFor="email">Your email address</Label>',
    },
    {
        "name": "Select",
        "import": 'import { Select, SelectContent, SelectItem, SelectTrigger, SelectValue } from "@/components/ui/select"',
        "usage": '<Select>\n  <SelectTrigger className="w-48">\n    <SelectValue placeholder="Theme" />\n'
                 '  </SelectTrigger>\n  <SelectContent>\n    <SelectItem value="light">Light</SelectItem>\n'
                 '    <SelectItem value="dark">Dark</SelectItem>\n  </SelectContent>\n</Select>',
    },
    {
        "name": "Tooltip",
        "import": 'import { Tooltip, TooltipContent, TooltipProvider, TooltipTrigger } from "@/components/ui/tooltip"',
        "usage": "<TooltipProvider>\n  <Tooltip>\n    <TooltipTrigger>Hover</TooltipTrigger>\n"
                 "    <TooltipContent>Add to library</TooltipContent>\n  </Tooltip>\n</TooltipProvider>",
    },
)

EXAMPLES = (
    {
        "input": "A landing page screenshot",
        "output": """
import { Button } from "@/components/ui/button"

export default function LandingPage() {
  return (
    <div className="min-h-screen bg-gray-100">
      <header className="bg-white shadow-sm">
        <div className="max-w-7xl mx-auto px-4 py-4 flex items-center justify-between">
          <span className="font-bold text-xl">LOGO</span>
          <nav className="hidden md:flex space-x-8">
            <a href="#features" className="text-gray-700 hover:text-gray-900">Features</a>
            <a href="#pricing" className="text-gray-700 hover:text-gray-900">Pricing</a>
          </nav>
          <Button variant="outline" className="rounded-full">Sign up</Button>
        </div>
      </header>
      <main className="max-w-7xl mx-auto px-4 py-12">
        <h1 className="text-4xl font-bold mb-6">Welcome to your all-in-one AI tool</h1>
        <Button className="rounded-full px-8 py-3 bg-black text-white hover:bg-gray-800">Get Started</Button>
      </main>
    </div>
  )
}
""",
    },
)

DESCRIBE_PROMPT = (
    "Provide a vivid, highly descriptive, and concise description of the uploaded image. "
    "Mention objects, layout, colors, textures, readable text, positions, and any notable visual details. "
    "Keep it factual and suitable to drive UI reconstruction code generation."
)

REPAIR_PROMPT = (
    "The following file is a TypeScript React component which may have syntax errors "
    "(unterminated template literals, unmatched braces, stray quotes, etc.). Fix the file so it is "
    "valid TypeScript/TSX and return only the complete corrected file contents with no explanation "
    "or surrounding code fences."
)

WITH_IMAGE_REQUEST = (
    "Analyze the provided image and create a React TypeScript component that recreates the UI shown. "
    "Transform any sketches, wireframes, or mockups into a polished, professional web interface."
)


def _component_docs() -> str:
    blocks = []
    for component in COMPONENT_LIBRARY:
        blocks.append(
            f"<component>\n<name>\n{component['name']}\n</name>\n"
            f"<import-instructions>\n{component['import']}\n</import-instructions>\n"
            f"<usage-instructions>\n{component['usage']}\n</usage-instructions>\n</component>"
        )
    return "\n".join(blocks)


def get_coding_prompt(shadcn: bool) -> str:
    """System prompt for code generation; shadcn adds the component library docs"""
    prompt = textwrap.dedent(CODING_PROMPT).strip() + "\n"

    if shadcn:
        prompt += (
            "\nThere are some prestyled components available for use. Please use your best judgement "
            "to use any of these components if the app calls for one.\n\n"
            "Here are the components that are available, along with how to import them, and how to use them:\n\n"
            + _component_docs() + "\n"
        )

    prompt += NO_OTHER_LIBRARIES

    examples = "\n".join(
        f"<example>\n<input>\n{e['input']}\n</input>\n<output>\n{e['output'].strip()}\n</output>\n</example>"
        for e in EXAMPLES
    )
    prompt += f"\nHere are some examples of good outputs:\n\n{examples}\n"

    return prompt


def build_user_prompt(has_image: bool, description: Optional[str], image_url: Optional[str]) -> str:
    """
    User turn of the generation prompt.

    With an image part the description (if any) is appended as extra
    context; without one the description, or the image URL, stands in
    for the image.
    """
    if has_image:
        prompt = WITH_IMAGE_REQUEST
        if description:
            prompt += f"\n\nImage description: {description}"
        return prompt

    descriptor = description or (f"Image URL: {image_url}" if image_url else "none")
    return f"Create a React TypeScript component that recreates the UI described. Image description: {descriptor}"

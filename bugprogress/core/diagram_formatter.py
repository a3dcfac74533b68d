"""
Diagram Formatter
=================
THE SINGLE SOURCE OF TRUTH for the Mermaid text handed to the browser.

STRICT DETERMINISM CONTRACT:
  - This module NEVER performs I/O.
  - This module NEVER mutates the graph it is given.
  - Given the same graph, it ALWAYS returns the exact same output string.

OUTPUT SHAPE (byte-for-byte):
    flowchart LR
    classDef ...                      (fixed style table)
    subgraph "Progress"
    direction LR
    <dep> --> <dependent>             (one per rendered edge)
    click <id> "<url>" "<summary>" _blank
    end

    class <ids> <group>;              (only when a defect is present)
    subgraph "Duplicates" ... end     (only when filtering duplicates)

Nodes are emitted in ascending bug id order.
"""
from typing import Dict, List

from bugprogress.core.config import BUGZILLA_BASE_URL
from bugprogress.models.bug import Bug
from bugprogress.models.bug_graph import BugGraph
from bugprogress.parser.classification import STYLE_GROUPS, State, classify, node_status
from bugprogress.parser.status_predicates import is_defect, is_duplicate


# ---------------------------------------------------------------------------
# Style Table
# ---------------------------------------------------------------------------
# inprogress and blockedinprogress have no classDef and keep the default fill.
STYLES: List[str] = [
    "classDef resolved fill:green",
    "classDef available fill:yellow",
    "classDef blocked fill:red",
    "classDef review fill:lightgreen",
    "classDef unlandable fill:lightpink",
    "classDef duplicate fill:teal",
    "classDef bugs stroke:red,stroke-width:2px,stroke-dasharray: 5 5;",
]

BUGS_GROUP = "bugs"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def html_encode(text: str) -> str:
    """
    Escape the two characters that break a Mermaid click tooltip.

    `"` and `` ` `` become numeric character references; everything else is
    returned unchanged.
    """
    return "".join(f"&#{ord(ch)};" if ch in '"`' else ch for ch in text)


def format_click(node: Bug, base_url: str = BUGZILLA_BASE_URL) -> str:
    return (
        f'click {node.id} "{base_url}show_bug.cgi?id={node.id}" '
        f'"{html_encode(node.summary)}" _blank'
    )


def format_duplicates(graph: BugGraph, base_url: str = BUGZILLA_BASE_URL) -> str:
    """Separate subgraph listing every duplicate bug."""
    dup_nodes: List[str] = []
    dup_interaction: List[str] = []
    for dup in graph.ordered_nodes():
        if not is_duplicate(dup):
            continue
        dup_nodes.append(f"{dup.id}:::duplicate")
        dup_interaction.append(format_click(dup, base_url))

    return (
        'subgraph "Duplicates"\ndirection TB\n'
        + "\n".join(dup_nodes) + "\n"
        + "\n".join(dup_interaction) + "\n"
        + "classDef duplicate fill:teal\nend\n"
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def render(
    graph: BugGraph,
    filter_duplicates: bool = False,
    base_url: str = BUGZILLA_BASE_URL,
) -> str:
    """
    Render `graph` as a Mermaid flowchart.

    Parameters
    ----------
    graph : BugGraph
        Output of GraphBuilder.build().
    filter_duplicates : bool
        Drop duplicate bugs (and edges touching them) from the main graph and
        list them in their own "Duplicates" subgraph instead.
    base_url : str
        Bugzilla root used for click-through links.

    Returns
    -------
    str
        Diagram text, ready for mermaid.render().
    """
    links: List[str] = []
    interaction: List[str] = []
    defects: List[Bug] = []
    styled: Dict[str, List[int]] = {group: [] for group in STYLE_GROUPS}

    for from_node in graph.ordered_nodes():
        if filter_duplicates and is_duplicate(from_node):
            continue

        if is_defect(from_node):
            defects.append(from_node)

        for to in from_node.depends_on:
            to_node = graph.get_node(to)
            if filter_duplicates and is_duplicate(to_node):
                continue
            status = node_status(graph, from_node, to_node)
            links.append(f"{to}{status.to_label} --> {from_node.id}{status.from_label}")
            styled[status.from_state].append(from_node.id)

        if not from_node.depends_on:
            from_state = classify(from_node, is_empty=True, leaf=True)
            styled[from_state].append(from_node.id)
            if from_state != State.RESOLVED and is_defect(from_node):
                styled[BUGS_GROUP].append(from_node.id)

        interaction.append(format_click(from_node, base_url))

    apply_style: List[str] = []
    if defects:
        for group, ids in styled.items():
            if not ids:
                continue
            apply_style.append(f"class {','.join(str(i) for i in ids)} {group};")

    progress = (
        'subgraph "Progress"\ndirection LR\n'
        + "\n".join(links) + "\n"
        + "\n".join(interaction) + "\nend\n"
    )

    output = (
        "flowchart LR\n"
        + "\n".join(STYLES) + "\n"
        + progress + "\n"
        + "\n".join(apply_style) + "\n"
    )
    if filter_duplicates:
        output += format_duplicates(graph, base_url) + "\n"
    return output

"""
Dependency Visualizer
Interactive Plotly figures and pandas tables for module analysis results
"""

import plotly.graph_objects as go
import networkx as nx
from typing import Dict, List, Optional, Set, Tuple
import streamlit as st
import pandas as pd
import logging

from .models import AnalysisResult, DuplicateFinding

logger = logging.getLogger(__name__)

CYCLE_COLOR = '#FF4444'
DUPLICATE_COLOR = '#FF8800'
SCC_COLOR = '#FFAA00'
MODULE_COLOR = '#44AA44'


def findings_to_dataframe(duplicates: Dict[str, List[DuplicateFinding]]) -> pd.DataFrame:
    """Flatten duplicate findings into one row per redundant dependency"""
    rows = [
        {'Module': finding.module, 'Duplicate': finding.duplicate, 'Owner': finding.owner}
        for findings in duplicates.values()
        for finding in findings
    ]
    return pd.DataFrame(rows, columns=['Module', 'Duplicate', 'Owner'])


class DependencyVisualizer:
    """Creates interactive visualizations for module dependency analysis"""

    def __init__(self, graph: nx.DiGraph):
        self.graph = graph
        self.layout_cache = {}

    def create_dependency_graph_plot(self, chain: Optional[List[str]] = None,
                                     duplicates: Optional[Dict[str, List[DuplicateFinding]]] = None,
                                     highlight_sccs: Optional[List[List[str]]] = None) -> go.Figure:
        """Create an interactive dependency graph visualization"""
        if self.graph.number_of_nodes() == 0:
            return self._create_empty_plot("No modules to visualize")

        pos = self._get_graph_layout()

        cycle_edges = set(zip(chain, chain[1:])) if chain else set()
        duplicate_edges = {
            (finding.module, finding.duplicate)
            for findings in (duplicates or {}).values()
            for finding in findings
        }

        node_trace = self._create_node_trace(pos, chain or [], duplicates or {}, highlight_sccs or [])
        edge_traces = self._create_edge_traces(pos, cycle_edges, duplicate_edges)

        return go.Figure(data=edge_traces + [node_trace], layout=self._get_plot_layout())

    def _get_graph_layout(self) -> Dict:
        """Calculate graph layout using spring algorithm"""
        if 'spring' not in self.layout_cache:
            if self.graph.number_of_nodes() > 100:
                # For large graphs, use a faster algorithm
                pos = nx.spring_layout(self.graph, k=1, iterations=20, seed=42)
            else:
                pos = nx.spring_layout(self.graph, k=2, iterations=50, seed=42)
            self.layout_cache['spring'] = pos

        return self.layout_cache['spring']

    def _create_node_trace(self, pos: Dict, chain: List[str],
                           duplicates: Dict[str, List[DuplicateFinding]],
                           highlight_sccs: List[List[str]]) -> go.Scatter:
        """Create node trace for the graph"""
        node_x = []
        node_y = []
        node_text = []
        node_colors = []
        node_sizes = []

        cycle_nodes = set(chain)
        scc_nodes: Set[str] = set()
        for scc in highlight_sccs:
            scc_nodes.update(scc)

        for node in self.graph.nodes():
            x, y = pos[node]
            node_x.append(x)
            node_y.append(y)

            color, size = self._get_node_style(node, cycle_nodes, scc_nodes, duplicates)
            node_colors.append(color)
            node_sizes.append(size)

            node_data = self.graph.nodes[node]
            hover_text = f"<b>{node}</b><br>"
            if node_data.get('label'):
                hover_text += f"Label: {node_data['label']}<br>"
            hover_text += f"Path: {node_data.get('path', 'unknown')}<br>"
            hover_text += f"Dependencies: {self.graph.out_degree(node)}<br>"
            hover_text += f"Dependents: {self.graph.in_degree(node)}"

            if node in cycle_nodes:
                hover_text += "<br><b>Part of cycle</b>"
            elif node in scc_nodes:
                hover_text += "<br><b>In strongly connected component</b>"
            if node in duplicates:
                hover_text += f"<br><b>{len(duplicates[node])} redundant dependencies</b>"

            node_text.append(hover_text)

        return go.Scatter(
            x=node_x, y=node_y,
            mode='markers+text',
            text=list(self.graph.nodes()),
            textposition="middle center",
            textfont=dict(size=8),
            hovertemplate='%{hovertext}<extra></extra>',
            hovertext=node_text,
            marker=dict(
                size=node_sizes,
                color=node_colors,
                line=dict(width=2, color='white'),
                opacity=0.8
            ),
            name="Modules"
        )

    def _get_node_style(self, node: str, cycle_nodes: Set[str], scc_nodes: Set[str],
                        duplicates: Dict[str, List[DuplicateFinding]]) -> Tuple[str, int]:
        """Determine node color and size based on its characteristics"""
        size = 15
        degree = self.graph.degree(node)
        if degree > 10:
            size = 25
        elif degree > 5:
            size = 20

        if node in cycle_nodes:
            color = CYCLE_COLOR
        elif node in scc_nodes:
            color = SCC_COLOR
        elif node in duplicates:
            color = DUPLICATE_COLOR
        else:
            color = MODULE_COLOR

        return color, size

    def _create_edge_traces(self, pos: Dict, cycle_edges: Set[Tuple[str, str]],
                            duplicate_edges: Set[Tuple[str, str]]) -> List[go.Scatter]:
        """Create edge traces for regular, cycle and redundant dependencies"""
        groups = {
            'regular': ([], []),
            'cycle': ([], []),
            'duplicate': ([], []),
        }

        for edge in self.graph.edges():
            x0, y0 = pos[edge[0]]
            x1, y1 = pos[edge[1]]

            if edge in cycle_edges:
                key = 'cycle'
            elif edge in duplicate_edges:
                key = 'duplicate'
            else:
                key = 'regular'

            edge_x, edge_y = groups[key]
            edge_x.extend([x0, x1, None])
            edge_y.extend([y0, y1, None])

        styles = {
            'regular': (dict(width=1, color='#888'), "Dependencies"),
            'cycle': (dict(width=3, color=CYCLE_COLOR), "Cycle Dependencies"),
            'duplicate': (dict(width=2, color=DUPLICATE_COLOR, dash='dash'), "Redundant Dependencies"),
        }

        edge_traces = []
        for key, (edge_x, edge_y) in groups.items():
            if not edge_x:
                continue
            line, name = styles[key]
            edge_traces.append(go.Scatter(
                x=edge_x, y=edge_y,
                line=line,
                hoverinfo='none',
                mode='lines',
                name=name
            ))

        return edge_traces

    def _get_plot_layout(self) -> dict:
        """Get layout configuration for the plot"""
        return dict(
            title=dict(text="Module Dependency Graph", font=dict(size=16)),
            showlegend=True,
            hovermode='closest',
            margin=dict(b=20, l=5, r=5, t=40),
            annotations=[dict(
                text="Hover over modules for details. Red edges close a cycle, dashed edges are redundant.",
                showarrow=False,
                xref="paper", yref="paper",
                x=0.005, y=-0.002,
                xanchor='left', yanchor='bottom',
                font=dict(color="#888", size=12)
            )],
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )

    def _create_empty_plot(self, message: str) -> go.Figure:
        """Create an empty plot with a message"""
        fig = go.Figure()
        fig.add_annotation(
            text=message,
            xref="paper", yref="paper",
            x=0.5, y=0.5,
            showarrow=False,
            font=dict(size=16, color="gray")
        )
        fig.update_layout(
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )
        return fig

    def create_duplicate_chart(self, result: AnalysisResult) -> go.Figure:
        """Bar chart of redundant dependencies per module"""
        if not result.duplicates:
            return self._create_empty_plot("No redundant dependencies detected")

        modules = list(result.duplicates.keys())
        counts = [len(findings) for findings in result.duplicates.values()]

        fig = go.Figure(data=[
            go.Bar(
                x=modules,
                y=counts,
                marker_color=DUPLICATE_COLOR,
                text=counts,
                textposition='auto',
            )
        ])

        fig.update_layout(
            title="Redundant Dependencies per Module",
            xaxis_title="Module",
            yaxis_title="Redundant Dependencies",
            plot_bgcolor='white'
        )

        return fig

    def display_duplicate_table(self, result: AnalysisResult):
        """Display duplicate findings in a table"""
        if not result.duplicates:
            st.info("No redundant dependencies detected.")
            return

        st.dataframe(findings_to_dataframe(result.duplicates), use_container_width=True)

    def display_scc_details_table(self, sccs: List[List[str]]):
        """Display strongly connected components in a table"""
        if not sccs:
            st.info("No strongly connected components found.")
            return

        table_data = []
        for i, scc in enumerate(sccs):
            table_data.append({
                'SCC ID': i,
                'Size': len(scc),
                'Modules': ', '.join(scc)
            })

        st.dataframe(pd.DataFrame(table_data), use_container_width=True)

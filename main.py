import streamlit as st
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import networkx as nx

from module_deps import DependencyAnalyzer, CycleDetector, ModuleGraphBuilder
from module_deps.config import AnalyzerConfig
from module_deps.errors import ConfigError, ModuleDepsError
from module_deps.models import AnalysisResult
from module_deps.report import format_cycle
from module_deps.visualizer import DependencyVisualizer

logger = logging.getLogger(__name__)

# =============================================================================
# DATA MODELS
# =============================================================================

@dataclass
class DashboardState:
    """Everything the dashboard renders for one analyzed directory"""
    directory: str
    builder: ModuleGraphBuilder
    result: AnalysisResult
    graph_stats: dict
    strongly_connected_components: List[List[str]]

    @property
    def graph(self) -> nx.DiGraph:
        return self.builder.graph

# =============================================================================
# CONFIGURATION
# =============================================================================

def load_config() -> Optional[AnalyzerConfig]:
    """Read MODULE_DEPS_* settings, reporting bad values on the page"""
    try:
        return AnalyzerConfig.from_env()
    except ConfigError as e:
        st.error(f"Invalid configuration: {e}")
        return None

# =============================================================================
# ANALYSIS
# =============================================================================

def run_analysis(directory: str, config: AnalyzerConfig) -> DashboardState:
    analyzer = DependencyAnalyzer(suffix=config.suffix)
    result = analyzer.analyze_directory(directory, config)
    graph = analyzer.builder.graph

    sccs = []
    if result.cycles_found:
        sccs = CycleDetector(graph).find_strongly_connected_components()

    return DashboardState(
        directory=directory,
        builder=analyzer.builder,
        result=result,
        graph_stats=analyzer.builder.get_graph_stats(),
        strongly_connected_components=sccs
    )


def module_details(state: DashboardState, module_name: str) -> Dict:
    """Dependencies, dependents and findings for one module"""
    return {
        'path': state.graph.nodes[module_name].get('path'),
        'dependencies': state.builder.get_module_dependencies(module_name),
        'dependents': sorted(state.builder.get_module_dependents(module_name)),
        'undiscovered': state.result.missing_dependencies.get(module_name, []),
        'duplicates': state.result.duplicates.get(module_name, [])
    }


def main():
    st.set_page_config(page_title="module-deps", layout="wide")

    config = load_config()
    if config is None:
        return

    # Configure logging
    logging.basicConfig(level=config.log_level)

    st.title("Module Dependency Analysis")
    st.markdown(f"##### Finds circular and redundant dependencies across `*{config.suffix}` module descriptors.")

    col1, col2 = st.columns([1, 2])

    with col1:
        st.subheader("Module Directory")
        directory = st.text_input("Directory to scan", placeholder="e.g., web/modules", key="directory_input")

        if st.button("Analyze Dependencies", type="primary", use_container_width=True) and directory:
            with st.spinner(f"Analyzing modules in '{directory}'..."):
                try:
                    st.session_state.dependency_analysis = run_analysis(directory, config)
                except ModuleDepsError as e:
                    logger.error(f"Analysis of {directory} failed: {e}")
                    st.session_state.dependency_analysis = None
                    st.error(f"Analysis failed: {e}")
                else:
                    st.success(f"Analyzed {st.session_state.dependency_analysis.result.module_count} modules.")

    with col2:
        state = st.session_state.get('dependency_analysis')
        if state is None:
            st.info("Enter a directory on the left to see the analysis.")
        else:
            result = state.result
            st.markdown("#### Quick Stats")
            stat_col1, stat_col2, stat_col3, stat_col4 = st.columns(4)

            with stat_col1:
                st.metric("Modules", result.module_count)
            with stat_col2:
                st.metric("Dependencies", result.edge_count)
            with stat_col3:
                st.metric("Undiscovered Dependencies", state.graph_stats['missing_dependencies'])
            with stat_col4:
                st.metric("Redundant Dependencies", result.finding_count)

            if result.cycles_found:
                st.error(f"**Cycle**: {format_cycle(result.chain)}")
                st.caption("Redundant dependency analysis is skipped while a cycle exists.")
            elif result.duplicates:
                st.warning(f"{result.finding_count} redundant dependencies in {len(result.duplicates)} modules.")
            else:
                st.success("No circular or redundant dependencies detected.")

    state = st.session_state.get('dependency_analysis')
    if state is None:
        return

    st.markdown("---")
    result = state.result
    visualizer = DependencyVisualizer(state.graph)

    findings_tab, graph_tab, details_tab, missing_tab = st.tabs([
        "Findings",
        "Graph Visualization",
        "Module Details",
        "Undiscovered Dependencies"
    ])

    with findings_tab:
        if result.cycles_found:
            st.subheader("Strongly Connected Components")
            visualizer.display_scc_details_table(state.strongly_connected_components)
        else:
            st.subheader("Redundant Dependencies")
            visualizer.display_duplicate_table(result)
            if result.duplicates:
                st.plotly_chart(visualizer.create_duplicate_chart(result), use_container_width=True)

    with graph_tab:
        graph_plot = visualizer.create_dependency_graph_plot(
            chain=result.chain,
            duplicates=result.duplicates,
            highlight_sccs=state.strongly_connected_components
        )
        st.plotly_chart(graph_plot, use_container_width=True)

        stats_col1, stats_col2, stats_col3 = st.columns(3)
        with stats_col1:
            st.metric("Graph Density", f"{state.graph_stats['density']:.3f}")
        with stats_col2:
            st.metric("Average Degree", f"{state.graph_stats['average_degree']:.1f}")
        with stats_col3:
            is_connected = "Yes" if state.graph_stats['is_connected'] else "No"
            st.metric("Weakly Connected", is_connected)

    with details_tab:
        module_name = st.selectbox("Module", sorted(state.graph.nodes), key="module_details")
        if module_name:
            details = module_details(state, module_name)
            st.caption(details["path"])
            deps_col, dependents_col = st.columns(2)
            with deps_col:
                st.markdown("**Depends on**")
                st.write(", ".join(details["dependencies"]) or "Nothing")
                if details["undiscovered"]:
                    st.caption(f"Not discovered: {', '.join(details['undiscovered'])}")
            with dependents_col:
                st.markdown("**Required by**")
                st.write(", ".join(details["dependents"]) or "Nothing")
            for finding in details["duplicates"]:
                st.warning(f"`{finding.duplicate}` is already provided by `{finding.owner}`")

    with missing_tab:
        if result.missing_dependencies:
            for module, deps in result.missing_dependencies.items():
                st.write(f"**{module}**: {', '.join(deps)}")
        else:
            st.success("Every declared dependency was discovered.")


if __name__ == "__main__":
    main()

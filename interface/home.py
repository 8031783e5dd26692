# interface/home.py

import streamlit as st

def run():
    st.header("Differential Expression Package Comparison")

    st.markdown(
        """
        This app runs the same RNA-seq count matrix through **DESeq2**, **edgeR** and **limma-voom**
        and compares what each package reports.

        **Key Features:**
        - Upload a tab-separated count matrix and pick the gene and sample columns
        - Assign conditions and groups per sample and choose the contrast
        - Run all three Bioconductor packages (through R) with their usual filtering steps
        - Compare raw p-value histograms, volcano plots and a Venn diagram of reported genes

        Requires R with the `DESeq2`, `edgeR` and `limma` packages installed.

        **Next step:** Go to the **Count Import** page to begin your analysis.
        """
    )

run()

"""
Bridge between pandas and the R/Bioconductor packages.

DESeq2, edgeR and limma are called through rpy2. Each workflow is kept as a
small R function in ``R_SOURCES``, compiled once on first use and called with
inputs converted from pandas. R warnings are re-emitted as R messages and end
up in Python logging instead of the R console.
"""

import logging
from functools import lru_cache
from typing import Iterable

import pandas as pd

logger = logging.getLogger(__name__)

RPY2_IMPORT_ERROR = None
try:
    import rpy2.rinterface_lib.callbacks as r_callbacks
    import rpy2.robjects as ro
    from rpy2.rinterface_lib.embedded import RRuntimeError
    from rpy2.robjects import pandas2ri
    from rpy2.robjects.conversion import localconverter
    from rpy2.robjects.packages import isinstalled
    HAS_RPY2 = True
except (ImportError, OSError, RuntimeError, ValueError) as e:
    # rpy2 raises non-ImportErrors when it is installed but R itself is not
    HAS_RPY2 = False
    RPY2_IMPORT_ERROR = e


R_PACKAGES = ("DESeq2", "edgeR", "limma")

R_HELPERS = r"""
log_warnings <- function(expr) {
    withCallingHandlers(expr, warning = function(w) {
        message("Warning: ", conditionMessage(w))
        invokeRestart("muffleWarning")
    })
}
"""

R_SOURCES = {
    "deseq2": r"""
function(counts, coldata, factor, numerator, denominator) {
    log_warnings({
        suppressPackageStartupMessages(library(DESeq2))
        count_matrix <- round(as.matrix(counts))
        mode(count_matrix) <- "integer"
        dds <- DESeqDataSetFromMatrix(countData = count_matrix,
                                      colData = coldata,
                                      design = as.formula(paste("~", factor)))
        dds <- DESeq(dds, quiet = TRUE)
        res <- results(dds, contrast = c(factor, numerator, denominator))
        as.data.frame(res)
    })
}
""",
    "edger": r"""
function(counts, group, levels) {
    log_warnings({
        suppressPackageStartupMessages(library(edgeR))
        group <- factor(group, levels = levels)
        dge <- DGEList(counts = as.matrix(counts), group = group, remove.zeros = TRUE)
        keep <- filterByExpr(dge, group = group)
        dge <- dge[keep, , keep.lib.sizes = FALSE]
        dge <- calcNormFactors(dge)
        dge <- estimateCommonDisp(dge)
        dge <- estimateTagwiseDisp(dge)
        table <- exactTest(dge)$table
        data.frame(logFC = table$logFC,
                   logCPM = table$logCPM,
                   PValue = table$PValue,
                   padj = p.adjust(table$PValue, method = "BH"),
                   row.names = rownames(table))
    })
}
""",
    "limma": r"""
function(counts, design, group, levels) {
    log_warnings({
        suppressPackageStartupMessages({
            library(edgeR)
            library(limma)
        })
        design <- as.matrix(design)
        group <- factor(group, levels = levels)
        dge <- DGEList(counts = as.matrix(counts), group = group)
        keep <- filterByExpr(dge, design = design)
        dge <- dge[keep, , keep.lib.sizes = FALSE]
        v <- voom(dge, design = design, plot = FALSE)
        fit <- lmFit(v, design)
        fit <- eBayes(fit, trend = TRUE)
        topTable(fit, coef = ncol(design), number = Inf, sort.by = "P")
    })
}
""",
}

_console_routed = False


def _log_r_stderr(text: str):
    text = text.strip()
    if text:
        logger.warning(f"R: {text}")


def _log_r_stdout(text: str):
    text = text.strip()
    if text:
        logger.debug(f"R: {text}")


def _route_r_console():
    global _console_routed
    if _console_routed:
        return
    r_callbacks.consolewrite_warnerror = _log_r_stderr
    r_callbacks.consolewrite_print = _log_r_stdout
    _console_routed = True


def missing_r_packages(packages: Iterable[str] = R_PACKAGES) -> list[str]:
    if not HAS_RPY2:
        return list(packages)
    return [p for p in packages if not isinstalled(p)]


def require_r(packages: Iterable[str] = R_PACKAGES):
    """Raise ImportError unless rpy2, R and the given packages are usable."""
    if not HAS_RPY2:
        raise ImportError(
            f"rpy2 with a working R installation is required ({RPY2_IMPORT_ERROR}). "
            "Install with: pip install rpy2"
        )
    missing = missing_r_packages(packages)
    if missing:
        raise ImportError(
            f"R packages not installed: {missing}. Install with BiocManager::install()"
        )
    _route_r_console()


def to_r(df: pd.DataFrame):
    with localconverter(ro.default_converter + pandas2ri.converter):
        return ro.conversion.get_conversion().py2rpy(df)


def to_pandas(r_df) -> pd.DataFrame:
    with localconverter(ro.default_converter + pandas2ri.converter):
        return ro.conversion.get_conversion().rpy2py(r_df)


def str_vector(values: Iterable) -> "ro.StrVector":
    return ro.StrVector([str(v) for v in values])


@lru_cache(maxsize=None)
def r_function(name: str):
    if name not in R_SOURCES:
        raise KeyError(f"No R workflow named '{name}'")
    ro.r(R_HELPERS)
    return ro.r(R_SOURCES[name])


def call_r(name: str, *args) -> pd.DataFrame:
    """Run one of the R workflows and return its result table as pandas."""
    fn = r_function(name)
    try:
        result = fn(*args)
    except RRuntimeError as e:
        logger.error(f"R workflow '{name}' failed: {e}")
        raise
    return to_pandas(result)

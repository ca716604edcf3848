import sys
from earnings_alpha import pipeline, log

def main():
    logger = log.logger
    logger.info("Running Earnings Surprise Event Study...")
    
    try:
        study, result = pipeline.run_analysis()
        
        for name, size in study.group_sizes().items():
            caar = study.group_metrics(name)
            final = f"{caar.iloc[-1]:.6f}" if not caar.empty else "n/a"
            logger.info(f"{name}: {size} stocks, final CAAR {final}")
        
        logger.info(
            f"Bootstrap complete ({result.iterations} iterations, sample size {result.sample_size})."
        )
        logger.info("Workflow Complete.")
        
    except Exception as e:
        logger.critical(f"Workflow failed: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()

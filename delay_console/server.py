from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from delay_reporter.policy import get_policy_loader
from delay_reporter.runtime.delay import REPORT_TAG, collect_delayed_report
from delay_console.schemas import DelayReportResponse, HealthResponse

policy = get_policy_loader()

app = FastAPI(title="Delay Reporter Console")

# Constants
REPORT_ROUTE = policy.get_console_route()
HOST = policy.get_console_host()
PORT = policy.get_console_port()


# --- API Routes ---

# Plain `def` handlers run in the threadpool, so the blocking wait never stalls the event loop.
def get_report_text():
    report = collect_delayed_report(verbose=policy.is_verbose())
    return PlainTextResponse(report.line)


app.add_api_route(REPORT_ROUTE, get_report_text, methods=["GET"], response_class=PlainTextResponse)


@app.get("/api/report", response_model=DelayReportResponse)
def get_report_json():
    report = collect_delayed_report(verbose=policy.is_verbose())
    return DelayReportResponse(
        tag=REPORT_TAG,
        slept_for_seconds=report.target_sleep_time,
        elapsed_seconds=report.elapsed,
        cwd=report.cwd,
        line=report.line,
    )


@app.get("/api/health", response_model=HealthResponse)
async def get_health():
    return HealthResponse(policy_version=policy.version, policy_digest=policy.digest)


def serve():
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    serve()

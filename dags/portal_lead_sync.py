"""
Portal Lead Sync DAG

Pulls new portal leads and forwards them to the webhook.

Schedule: Every 2 hours. The first run (no cursor stored) is a six-month
backfill; later runs are incremental.
"""
from datetime import datetime, timedelta
from airflow import DAG
from airflow.operators.python import PythonOperator

from dags.utils.notifications import (
    format_sync_failure_message,
    format_sync_summary,
    send_slack_notification,
)
from src.leadsync.pipelines.incremental_sync import build_pipeline
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)

# No retries: a failed run leaves the cursor untouched and the next
# scheduled run picks up from the same watermark.
default_args = {
    'owner': 'leadsync',
    'depends_on_past': False,
    'email_on_failure': False,
    'email_on_retry': False,
    'retries': 0,
    'execution_timeout': timedelta(minutes=30),
}


def notify_sync_failure(context):
    """Task failure callback: post the error to Slack."""
    task_instance = context.get('task_instance')
    message = format_sync_failure_message(
        dag_id=context['dag'].dag_id if context.get('dag') else 'portal_lead_sync',
        task_id=task_instance.task_id if task_instance else 'unknown',
        error=context.get('exception'),
    )
    send_slack_notification(message)


def run_lead_sync(**context):
    """
    Run one sync and publish its summary.

    Returns:
        SyncResult as a dictionary (stored in XCom)
    """
    logger.info("lead_sync_task_started")

    result = build_pipeline().run()
    summary = result.to_dict()

    logger.info("lead_sync_task_completed", **summary)
    if result.delivered:
        send_slack_notification(format_sync_summary(summary))

    return summary


with DAG(
    'portal_lead_sync',
    default_args=default_args,
    description='Incremental sync of portal leads to the downstream webhook',
    schedule='0 */2 * * *',  # every 2 hours
    start_date=datetime(2024, 1, 1),
    catchup=False,
    max_active_runs=1,
    tags=['leads', 'sync', 'webhook'],
) as dag:

    sync_task = PythonOperator(
        task_id='sync_portal_leads',
        python_callable=run_lead_sync,
        on_failure_callback=notify_sync_failure,
    )
